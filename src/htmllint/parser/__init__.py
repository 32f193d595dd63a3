"""Event-driven HTML validation: element stack, text scanner, consumer."""

from htmllint.parser.consumer import ValidatingConsumer
from htmllint.parser.scanner import TextScanner
from htmllint.parser.stack import ElementStack, StackEntry
from htmllint.parser.tokenizer import HTMLTokenizer

__all__ = [
    "ElementStack",
    "HTMLTokenizer",
    "StackEntry",
    "TextScanner",
    "ValidatingConsumer",
]

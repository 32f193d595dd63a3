"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from htmllint.models.errors import Category


class Settings(BaseSettings):
    """Configuration for an htmllint session.

    Values are read from ``HTMLLINT_*`` environment variables and from a
    ``.env`` file in the working directory. List values are given as JSON,
    e.g. ``HTMLLINT_ONLY_TYPES='["structure"]'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="HTMLLINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Categories to keep; empty keeps all
    only_types: list[Category] = []

    # Elements whose contents are not markup (start/end tags included)
    ignore_elements: list[str] = ["script", "style"]

    # Custom rule tables; None uses the bundled HTML 4.01 tables
    rules_path: Path | None = None

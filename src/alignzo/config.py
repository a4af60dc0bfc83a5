"""Configuration loader for alignzo."""

from __future__ import annotations

import asyncio
import os
import tempfile
import tomllib
from pathlib import Path

import tomlkit
from pydantic import BaseModel, Field, field_validator

from alignzo.core.models.enums import FormMode
from alignzo.core.validation import ValidationPolicy
from alignzo.limits import HTTP_TIMEOUT
from alignzo.paths import ensure_directories, get_config_path


def atomic_write(path: Path, content: str) -> None:
    """Write file atomically to avoid partial/corrupt writes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".tmp_")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        Path(tmp_path).replace(path)
    except Exception:
        Path(tmp_path).unlink(missing_ok=True)
        raise


class ApiConfig(BaseModel):
    """Connection settings for the kanban HTTP endpoints."""

    base_url: str = Field(default="http://localhost:3000", description="Base URL of the web app")
    timeout_seconds: float = Field(default=HTTP_TIMEOUT, description="Per-request timeout")
    user_email: str | None = Field(
        default=None, description="Email recorded on category changes (None = 'system')"
    )
    team_id: str | None = Field(default=None, description="Team scope sent with task writes")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("base_url must not be empty")
        return value.rstrip("/")

    @field_validator("timeout_seconds")
    @classmethod
    def positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout_seconds must be greater than 0")
        return value


class ValidationConfig(BaseModel):
    """Form validation policy flags."""

    require_all_categories: bool = Field(
        default=False,
        description="Every catalog category must have an option (False = at least one)",
    )
    allow_past_due_date_on_edit: bool = Field(
        default=True,
        description="Keep an unchanged past due date when editing an existing task",
    )

    def to_policy(self, mode: FormMode = FormMode.CREATE) -> ValidationPolicy:
        """Build the validator policy for a form mode."""
        return ValidationPolicy(
            require_all_categories=self.require_all_categories,
            allow_past_due_date_on_edit=self.allow_past_due_date_on_edit,
            mode=mode,
        )


class AlignzoConfig(BaseModel):
    """Root configuration model."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> AlignzoConfig:
        """Load configuration from TOML file or use defaults."""
        if config_path is None:
            ensure_directories()
            config_path = get_config_path()

        if config_path.exists():
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)

        return cls()

    async def save(self, path: Path) -> None:
        """Serialize current config to TOML file.

        Args:
            path: Path to write config file (created if missing)
        """
        doc = tomlkit.document()

        api_table = tomlkit.table()
        for key, value in self.api.model_dump().items():
            if value is not None:
                api_table[key] = value
        doc["api"] = api_table

        validation_table = tomlkit.table()
        for key, value in self.validation.model_dump().items():
            validation_table[key] = value
        doc["validation"] = validation_table

        content = tomlkit.dumps(doc)
        await asyncio.to_thread(atomic_write, path, content)

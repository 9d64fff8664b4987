"""Pydantic models passed through the ``create`` pipeline."""

from __future__ import annotations

import secrets
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CreateOptions(BaseModel):
    """Arguments of one ``create`` invocation."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., min_length=1)
    template: str = Field(default="express", min_length=1)
    db_type: str | None = Field(default=None)

    def with_db_type(self, db_type: str) -> "CreateOptions":
        """Return a copy with the database type filled in."""
        return self.model_copy(update={"db_type": db_type})

    def event_props(self) -> dict[str, Any]:
        """Properties attached to telemetry events."""
        return {
            "projectName": self.project_name,
            "dbType": self.db_type,
            "template": self.template,
        }


def generate_api_secret() -> str:
    """128 hex characters from 64 random bytes."""
    return secrets.token_hex(64)


class Environment(BaseModel):
    """Values every file renderer of a template is called with."""

    model_config = ConfigDict(frozen=True)

    project_name: str
    db_type: str
    api_secret: str = Field(
        default_factory=generate_api_secret, pattern=r"^[0-9a-f]{128}$"
    )
    driver_env_variables: tuple[str, ...] = ()

    def template_context(self) -> dict[str, Any]:
        """The Jinja2 context for this environment."""
        return {
            "project_name": self.project_name,
            "db_type": self.db_type,
            "api_secret": self.api_secret,
            "driver_env_variables": list(self.driver_env_variables),
        }

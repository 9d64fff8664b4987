"""cubecli configuration.

Typed settings for the CLI. All settings use Pydantic v2 models so they are
validated at construction time and can be read from environment variables.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field


class NpmConfig(BaseModel):
    """How the package manager is invoked."""

    command: str = Field(default="npm", min_length=1)
    registry: str | None = Field(default=None, description="Optional --registry override")
    install_timeout: int = Field(
        default=900, ge=30, description="Per-install subprocess timeout in seconds"
    )


class TelemetryConfig(BaseModel):
    """Anonymous usage event reporting."""

    enabled: bool = Field(default=True)
    url: str = Field(default="https://track.cube.dev/track")
    timeout: float = Field(default=2.0, gt=0, description="Per-event HTTP timeout in seconds")


class CliConfig(BaseModel):
    """Global cubecli configuration.

    Created once by the CLI entry point and passed to the scaffolder and its
    collaborators.
    """

    server_package: str = Field(default="@cubejs-backend/server")
    default_template: str = Field(default="express")
    npm: NpmConfig = Field(default_factory=NpmConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @classmethod
    def from_env(cls) -> "CliConfig":
        """Build a ``CliConfig`` from environment variables.

        Recognised variables (all optional):
            CUBECLI_SERVER_PACKAGE, CUBECLI_DEFAULT_TEMPLATE,
            CUBECLI_NPM_COMMAND, CUBECLI_NPM_REGISTRY, CUBECLI_INSTALL_TIMEOUT,
            CUBEJS_TELEMETRY, CUBECLI_TELEMETRY_URL.
        """
        npm_kwargs: dict[str, Any] = {}
        if os.environ.get("CUBECLI_NPM_COMMAND"):
            npm_kwargs["command"] = os.environ["CUBECLI_NPM_COMMAND"]
        if os.environ.get("CUBECLI_NPM_REGISTRY"):
            npm_kwargs["registry"] = os.environ["CUBECLI_NPM_REGISTRY"]
        if os.environ.get("CUBECLI_INSTALL_TIMEOUT"):
            npm_kwargs["install_timeout"] = os.environ["CUBECLI_INSTALL_TIMEOUT"]

        telemetry_kwargs: dict[str, Any] = {}
        if os.environ.get("CUBEJS_TELEMETRY"):
            telemetry_kwargs["enabled"] = os.environ["CUBEJS_TELEMETRY"].strip().lower() not in (
                "false",
                "0",
                "no",
            )
        if os.environ.get("CUBECLI_TELEMETRY_URL"):
            telemetry_kwargs["url"] = os.environ["CUBECLI_TELEMETRY_URL"]

        kwargs: dict[str, Any] = {}
        if os.environ.get("CUBECLI_SERVER_PACKAGE"):
            kwargs["server_package"] = os.environ["CUBECLI_SERVER_PACKAGE"]
        if os.environ.get("CUBECLI_DEFAULT_TEMPLATE"):
            kwargs["default_template"] = os.environ["CUBECLI_DEFAULT_TEMPLATE"]

        return cls(
            npm=NpmConfig(**npm_kwargs),
            telemetry=TelemetryConfig(**telemetry_kwargs),
            **kwargs,
        )

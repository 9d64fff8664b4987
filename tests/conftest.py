"""Shared pytest fixtures for the cubecli test suite.

Provides reusable fixtures for:
- Fake collaborators of the scaffolder (installer, chooser, telemetry)
- A scaffolder wired to those fakes
- Mock subprocess helpers
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from cubecli.config import CliConfig, TelemetryConfig
from cubecli.drivers import default_registry
from cubecli.errors import InstallError
from cubecli.prompt import StaticChooser
from cubecli.scaffolder import ProjectScaffolder


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


class RecordingInstaller:
    """Installer that records calls instead of running npm."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.calls: list[dict[str, Any]] = []
        self.fail_on = fail_on

    async def install(
        self, project_dir: Path, packages: Sequence[str], *, dev: bool = False
    ) -> None:
        if self.fail_on and self.fail_on in packages:
            raise InstallError(f"Command `npm install {self.fail_on}` exited with 1", returncode=1)
        self.calls.append(
            {"kind": "install", "cwd": Path(project_dir), "packages": list(packages), "dev": dev}
        )

    async def install_all(self, project_dir: Path) -> None:
        self.calls.append({"kind": "install_all", "cwd": Path(project_dir), "packages": [], "dev": False})

    @property
    def installed(self) -> list[str]:
        return [pkg for call in self.calls for pkg in call["packages"]]


class RecordingTelemetry:
    """Event sink that keeps every event in memory."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    async def event(self, name: str, **props: Any) -> None:
        self.events.append((name, props))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_config() -> CliConfig:
    """Configuration with telemetry switched off."""
    return CliConfig(telemetry=TelemetryConfig(enabled=False))


@pytest.fixture
def installer() -> RecordingInstaller:
    return RecordingInstaller()


@pytest.fixture
def telemetry() -> RecordingTelemetry:
    return RecordingTelemetry()


@pytest.fixture
def chooser() -> StaticChooser:
    return StaticChooser("postgres")


@pytest.fixture
def scaffolder(
    cli_config: CliConfig,
    installer: RecordingInstaller,
    chooser: StaticChooser,
    telemetry: RecordingTelemetry,
) -> ProjectScaffolder:
    """A ProjectScaffolder wired to in-memory fakes."""
    return ProjectScaffolder(
        cli_config,
        installer=installer,
        drivers=default_registry(),
        chooser=chooser,
        telemetry=telemetry,
    )


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory

"""npm package manifest I/O and package installation.

``package.json`` is modelled with Pydantic so the scaffolder can build it,
write it, and merge the JDBC ``java`` section into it with validation.  Keys
npm adds on its own (``dependencies`` after an install, lock metadata, ...)
are kept as model extras so a read/write cycle never drops them.

Installation goes through the :class:`Installer` protocol; the real
implementation, :class:`NpmInstaller`, shells out to ``npm`` inside the
project directory it is handed.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from .config import CliConfig
from .errors import InstallError
from .utils import load_json, run_command, save_json

PACKAGE_JSON = "package.json"


# ---------------------------------------------------------------------------
# Manifest models
# ---------------------------------------------------------------------------


class MavenDependency(BaseModel):
    """A Maven coordinate consumed by ``node-java-maven``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    group_id: str = Field(..., alias="groupId")
    artifact_id: str = Field(..., alias="artifactId")
    version: str


class JavaConfig(BaseModel):
    """The ``java`` section of ``package.json``."""

    dependencies: list[MavenDependency] = Field(default_factory=list)


class PackageManifest(BaseModel):
    """A ``package.json`` document."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    version: str = "0.0.1"
    private: bool | None = None
    scripts: dict[str, str] = Field(default_factory=dict)
    dependencies: dict[str, str] | None = None
    dev_dependencies: dict[str, str] | None = Field(default=None, alias="devDependencies")
    java: JavaConfig | None = None

    def to_json(self) -> dict:
        """Return the manifest as the JSON object npm expects."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Manifest reader / writer
# ---------------------------------------------------------------------------


async def write_package_json(project_dir: Path, manifest: PackageManifest) -> Path:
    """Write *manifest* to ``<project_dir>/package.json`` and return the path."""
    path = Path(project_dir) / PACKAGE_JSON
    await save_json(manifest.to_json(), path)
    return path


def read_package_json(project_dir: Path) -> PackageManifest:
    """Read and validate ``<project_dir>/package.json``."""
    return PackageManifest.model_validate(load_json(Path(project_dir) / PACKAGE_JSON))


# ---------------------------------------------------------------------------
# Installation
# ---------------------------------------------------------------------------


class Installer(Protocol):
    """Installs npm packages into a project directory."""

    async def install(
        self, project_dir: Path, packages: Sequence[str], *, dev: bool = False
    ) -> None: ...

    async def install_all(self, project_dir: Path) -> None: ...


async def execute_command(
    command: str,
    args: Sequence[str],
    cwd: Path,
    timeout: int = 900,
) -> str:
    """Run ``command args...`` in *cwd* and return its stdout.

    Raises:
        InstallError: If the process exits non-zero or times out.
    """
    cmd = [command, *args]
    returncode, stdout, stderr = await run_command(cmd, cwd=cwd, timeout=timeout)
    if returncode != 0:
        joined = " ".join(cmd)
        raise InstallError(
            f"Command `{joined}` exited with {returncode}" + (f":\n{stderr}" if stderr else ""),
            command=joined,
            returncode=returncode,
            stderr=stderr,
        )
    return stdout


class NpmInstaller:
    """:class:`Installer` backed by the ``npm`` executable."""

    def __init__(self, config: CliConfig | None = None) -> None:
        self.config = config or CliConfig()

    def _registry_args(self) -> list[str]:
        if self.config.npm.registry:
            return ["--registry", self.config.npm.registry]
        return []

    async def install(
        self, project_dir: Path, packages: Sequence[str], *, dev: bool = False
    ) -> None:
        if not packages:
            return
        args = ["install", "--save-dev" if dev else "--save", *self._registry_args(), *packages]
        await execute_command(
            self.config.npm.command, args, cwd=project_dir, timeout=self.config.npm.install_timeout
        )

    async def install_all(self, project_dir: Path) -> None:
        """Run a bare ``npm install`` so lifecycle hooks (``install``) fire."""
        await execute_command(
            self.config.npm.command,
            ["install", *self._registry_args()],
            cwd=project_dir,
            timeout=self.config.npm.install_timeout,
        )

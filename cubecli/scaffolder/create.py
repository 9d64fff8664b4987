"""The ``create`` pipeline.

Takes ``CreateOptions`` and produces a new Cube.js app directory:

1. Reject an existing directory or an unknown template.
2. Write ``package.json`` and install the server package.
3. Pick the database (interactively when not given) and install its driver.
4. For the JDBC bridge, wire ``node-java-maven`` into ``package.json`` and
   reinstall so the Maven dependencies are fetched.
5. Render the template files with a fresh ``Environment``.
6. Install the template's extra dependencies.

Every step runs inside the project directory handed to it explicitly; the
process working directory is never changed.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..config import CliConfig
from ..drivers import (
    MAVEN_HELPER_PACKAGE,
    MAVEN_INSTALL_SCRIPT,
    DriverRegistry,
    DriverSpec,
    default_registry,
)
from ..errors import DirectoryExistsError, JdbcDescriptorError, UnsupportedDbTypeError
from ..packages import (
    Installer,
    JavaConfig,
    MavenDependency,
    NpmInstaller,
    PackageManifest,
    read_package_json,
    write_package_json,
)
from ..prompt import Chooser, RichChooser
from ..telemetry import EventSink, NullTelemetry
from ..utils import print_next_steps, print_stage, print_success
from .models import CreateOptions, Environment
from .registry import TEMPLATES, TemplateConfig, get_template
from .templates import write_file

INITIAL_VERSION = "0.0.1"


class ProjectScaffolder:
    """Creates a new Cube.js app.

    All collaborators are injectable so the pipeline can run without npm, a
    network connection or a terminal.
    """

    def __init__(
        self,
        config: CliConfig | None = None,
        *,
        installer: Installer | None = None,
        drivers: DriverRegistry | None = None,
        templates: Mapping[str, TemplateConfig] | None = None,
        chooser: Chooser | None = None,
        telemetry: EventSink | None = None,
    ) -> None:
        self.config = config or CliConfig()
        self.installer = installer or NpmInstaller(self.config)
        self.drivers = drivers or default_registry()
        self.templates = TEMPLATES if templates is None else templates
        self.chooser = chooser or RichChooser()
        self.telemetry = telemetry or NullTelemetry()
        self._events: list[asyncio.Task[None]] = []

    # -- Public API --------------------------------------------------------

    async def execute(self, options: CreateOptions, base_dir: str | Path) -> Path:
        """Run the whole pipeline and return the created project root.

        Raises:
            ScaffoldError: On any terminal failure; nothing is rolled back.
        """
        self._emit("Create App", **options.event_props())
        try:
            return await self._create(options, Path(base_dir))
        finally:
            await self._collect_events()

    def _emit(self, name: str, **props: Any) -> None:
        """Send a telemetry event in the background."""
        self._events.append(asyncio.create_task(self.telemetry.event(name, **props)))

    async def _collect_events(self) -> None:
        pending, self._events = self._events, []
        await asyncio.gather(*pending)

    # -- Steps -------------------------------------------------------------

    async def _create(self, options: CreateOptions, base_dir: Path) -> Path:
        project_dir = base_dir / options.project_name
        if project_dir.exists():
            raise DirectoryExistsError(options.project_name)
        template = get_template(options.template, self.templates)

        await asyncio.to_thread(project_dir.mkdir, parents=True)

        print_stage("Creating project structure")
        await write_package_json(project_dir, self.initial_manifest(options, template))

        print_stage("Installing server dependencies")
        await self.installer.install(project_dir, [self.config.server_package])

        if not options.db_type:
            options = options.with_db_type(
                self.chooser.choose("Select database", self.drivers.keys())
            )

        print_stage("Installing DB driver dependencies")
        driver = self.drivers.resolve(options.db_type)
        if driver is None:
            raise UnsupportedDbTypeError(options.db_type)
        await self.installer.install(project_dir, driver_packages(driver))

        env_variables = driver.env_variables
        if driver.is_jdbc_bridge:
            print_stage("Installing JDBC dependencies")
            env_variables = await self._install_jdbc(project_dir, options.db_type)

        print_stage("Writing files from template")
        env = Environment(
            project_name=options.project_name,
            db_type=options.db_type,
            driver_env_variables=env_variables,
        )
        await self.write_template_files(project_dir, template, env)

        if template.dependencies:
            print_stage("Installing template dependencies")
            await self.installer.install(project_dir, list(template.dependencies))

        if template.dev_dependencies:
            print_stage("Installing template dev dependencies")
            await self.installer.install(project_dir, list(template.dev_dependencies), dev=True)

        self._emit(
            "Create App Success", projectName=options.project_name, dbType=options.db_type
        )
        print_success(f"{options.project_name} app has been created 🎉")
        print_next_steps(options.project_name)
        return project_dir

    @staticmethod
    def initial_manifest(options: CreateOptions, template: TemplateConfig) -> PackageManifest:
        return PackageManifest(
            name=options.project_name,
            version=INITIAL_VERSION,
            private=True,
            scripts=dict(template.scripts),
        )

    async def _install_jdbc(self, project_dir: Path, db_type: str) -> tuple[str, ...]:
        """Merge the Maven dependency into ``package.json`` and reinstall.

        Returns the environment variables the JDBC descriptor declares.
        """
        descriptor = self.drivers.jdbc_descriptor(db_type)
        if descriptor is None:
            raise JdbcDescriptorError(db_type)

        manifest = merge_jdbc_manifest(read_package_json(project_dir), descriptor.maven_dependency)
        await write_package_json(project_dir, manifest)
        await self.installer.install_all(project_dir)
        return descriptor.env_variables

    @staticmethod
    async def write_template_files(
        project_dir: Path, template: TemplateConfig, env: Environment
    ) -> list[Path]:
        """Render every template file; writes are independent and run concurrently."""
        targets = [project_dir / rel for rel in template.files]
        contents = [render(env) for render in template.files.values()]
        await asyncio.gather(*(write_file(path, text) for path, text in zip(targets, contents)))
        return targets


def merge_jdbc_manifest(
    manifest: PackageManifest, maven_dependency: MavenDependency | None
) -> PackageManifest:
    """Return *manifest* with the JDBC bridge's ``java`` section and install hook."""
    update: dict = {"scripts": {**manifest.scripts, "install": MAVEN_INSTALL_SCRIPT}}
    if maven_dependency is not None:
        update["java"] = JavaConfig(dependencies=[maven_dependency])
    return manifest.model_copy(update=update)


def driver_packages(spec: DriverSpec) -> list[str]:
    """Packages to install for *spec*, including the Maven helper for the JDBC bridge."""
    packages = list(spec.packages)
    if spec.is_jdbc_bridge:
        packages.append(MAVEN_HELPER_PACKAGE)
    return packages

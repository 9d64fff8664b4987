"""Exceptions raised by the ``create`` pipeline.

Every one of them is terminal: the CLI reports the message and exits.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for failures reported to the user by the CLI."""


class DirectoryExistsError(ScaffoldError):
    """Raised when the target project directory is already present."""

    def __init__(self, project_name: str) -> None:
        self.project_name = project_name
        super().__init__(
            f"We cannot create a project called {project_name}: directory already exist."
        )


class UnknownTemplateError(ScaffoldError):
    """Raised when the requested template key is not registered."""

    def __init__(self, template: str, known: list[str] | None = None) -> None:
        self.template = template
        self.known = known or []
        message = f"Unknown template {template}"
        if self.known:
            message += f". Options: {', '.join(self.known)}"
        super().__init__(message)


class UnsupportedDbTypeError(ScaffoldError):
    """Raised when a database type resolves to no driver package."""

    def __init__(self, db_type: str | None) -> None:
        self.db_type = db_type
        super().__init__(f"Unsupported db type: {db_type}")


class JdbcDescriptorError(UnsupportedDbTypeError):
    """Raised when the JDBC bridge has no descriptor for the database type."""


class InstallError(ScaffoldError):
    """Raised when a package-manager subprocess fails."""

    def __init__(self, message: str, command: str = "", returncode: int = 0, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)

"""cubecli scaffolder -- creates new Cube.js app directories.

Quick usage::

    from cubecli.scaffolder import CreateOptions, ProjectScaffolder

    scaffolder = ProjectScaffolder()
    project_path = await scaffolder.execute(
        CreateOptions(project_name="hello-world", db_type="postgres"),
        base_dir=".",
    )
"""

from cubecli.scaffolder.create import ProjectScaffolder
from cubecli.scaffolder.models import CreateOptions, Environment
from cubecli.scaffolder.registry import TEMPLATES, TemplateConfig, get_template
from cubecli.scaffolder.templates import TemplateRenderer

__all__ = [
    "CreateOptions",
    "Environment",
    "ProjectScaffolder",
    "TEMPLATES",
    "TemplateConfig",
    "TemplateRenderer",
    "get_template",
]

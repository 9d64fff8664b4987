"""Static registry of app templates.

A template bundles the npm scripts written into ``package.json``, the files
rendered into the new project and any extra npm packages it needs.  Each
file is produced by a renderer: a pure function of the
:class:`~cubecli.scaffolder.models.Environment`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import lru_cache

from ..errors import UnknownTemplateError
from .models import Environment
from .templates import TemplateRenderer

FileRenderer = Callable[[Environment], str]

DEFAULT_TEMPLATE = "express"


@lru_cache(maxsize=1)
def _shared_renderer() -> TemplateRenderer:
    return TemplateRenderer()


def jinja_file(template_path: str) -> FileRenderer:
    """Renderer for a ``.j2`` file under the bundled template directory."""

    def render(env: Environment) -> str:
        return _shared_renderer().render(template_path, env.template_context())

    render.__name__ = f"render_{template_path}"
    return render


@dataclass(frozen=True)
class TemplateConfig:
    """Everything the scaffolder needs to know about one app template."""

    scripts: dict[str, str]
    files: dict[str, FileRenderer]
    dependencies: tuple[str, ...] = ()
    dev_dependencies: tuple[str, ...] = ()


_COMMON_FILES: dict[str, FileRenderer] = {
    ".env": jinja_file("common/env.j2"),
    ".gitignore": jinja_file("common/gitignore.j2"),
    "schema/Orders.js": jinja_file("common/Orders.js.j2"),
}


TEMPLATES: dict[str, TemplateConfig] = {
    "express": TemplateConfig(
        scripts={"dev": "node index.js"},
        files={
            "index.js": jinja_file("express/index.js.j2"),
            **_COMMON_FILES,
        },
    ),
    "serverless": TemplateConfig(
        scripts={
            "dev": "./node_modules/.bin/cubejs-dev-server",
            "deploy": "serverless deploy -v",
        },
        files={
            "cube.js": jinja_file("serverless/cube.js.j2"),
            "serverless.yml": jinja_file("serverless/serverless.yml.j2"),
            **_COMMON_FILES,
        },
        dependencies=("@cubejs-backend/serverless", "@cubejs-backend/serverless-aws"),
        dev_dependencies=("serverless",),
    ),
    "docker": TemplateConfig(
        scripts={"dev": "node index.js"},
        files={
            "index.js": jinja_file("express/index.js.j2"),
            "Dockerfile": jinja_file("docker/Dockerfile.j2"),
            ".dockerignore": jinja_file("docker/dockerignore.j2"),
            "docker-compose.yml": jinja_file("docker/docker-compose.yml.j2"),
            **_COMMON_FILES,
        },
    ),
}


def template_names() -> list[str]:
    return list(TEMPLATES)


def get_template(
    name: str, templates: Mapping[str, TemplateConfig] | None = None
) -> TemplateConfig:
    """Return the template registered as *name*.

    Raises:
        UnknownTemplateError: If no such template exists.
    """
    registry = TEMPLATES if templates is None else templates
    config = registry.get(name)
    if config is None:
        raise UnknownTemplateError(name, list(registry))
    return config

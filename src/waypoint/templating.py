"""Kida environment setup and the renderer views draw with.

Views never see kida directly: they hand a template name and a context
mapping to a :class:`Renderer` and assign the returned markup to their
root element. The default renderer loads templates from the configured
directories first, then from the templates bundled with waypoint, so an
application can override any screen by dropping a same-named file in
its own template directory.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from kida import ChoiceLoader, Environment, FileSystemLoader, PackageLoader
from kida.environment.exceptions import TemplateNotFoundError

from waypoint.config import AppConfig
from waypoint.errors import ConfigurationError


@runtime_checkable
class Renderer(Protocol):
    """``render(template_name, context) -> markup``."""

    def render(self, template_name: str, context: Mapping[str, Any]) -> str: ...


def create_environment(config: AppConfig) -> Environment:
    """Create a kida Environment from app configuration.

    Raises ``ConfigurationError`` if a configured template directory
    does not exist.
    """
    loaders = []
    directories = [config.template_dir] if config.template_dir is not None else []
    directories.extend(config.component_dirs)
    for directory in directories:
        if not Path(directory).is_dir():
            msg = f"Template directory {str(directory)!r} does not exist."
            raise ConfigurationError(msg)
        loaders.append(FileSystemLoader(str(directory)))

    # Bundled screen templates come last so applications can override them
    loaders.append(PackageLoader("waypoint", "templates"))

    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=True,
        lstrip_blocks=True,
    )


class TemplateRenderer:
    """Renders named templates from a kida Environment."""

    __slots__ = ("_env",)

    def __init__(self, env: Environment) -> None:
        self._env = env

    @classmethod
    def from_config(cls, config: AppConfig | None = None) -> "TemplateRenderer":
        return cls(create_environment(config or AppConfig()))

    @property
    def environment(self) -> Environment:
        return self._env

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        template = self._env.get_template(template_name)
        return template.render(dict(context))

    def has_template(self, template_name: str) -> bool:
        try:
            self._env.get_template(template_name)
        except TemplateNotFoundError:
            return False
        return True

"""Application configuration.

One frozen :class:`AppConfig` is built at startup and handed to the router,
the renderer and every view through their context.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(template_dir="templates", leaderboard_page_size=10)
    """

    # Navigation
    default_route: str = "/"

    # Templates
    template_dir: str | Path | None = None  # None = only the bundled templates
    component_dirs: tuple[str | Path, ...] = ()  # Extra template directories (partials, overrides)
    autoescape: bool = True
    debug: bool = False  # Enables template auto-reload

    # Anchor interception
    link_attribute: str = "href"
    external_marker: str = "data-external"

    # Screens
    leaderboard_page_size: int = 5
    pagination_id: str = "pagination"
    default_avatar: str = "public/img/avatar.jpg"

"""``waypoint check`` — verify every screen template can be loaded.

Exits with code 1 and lists the missing templates if any are absent.
"""

import argparse
import sys

from waypoint.app import STANDARD_ROUTES
from waypoint.config import AppConfig
from waypoint.errors import ConfigurationError
from waypoint.templating import TemplateRenderer


def run_check(args: argparse.Namespace) -> None:
    """Load each standard template through the configured loaders."""
    config = AppConfig(template_dir=args.template_dir)
    try:
        renderer = TemplateRenderer.from_config(config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    templates = sorted({entry.template for entry in STANDARD_ROUTES if entry.template})
    missing = [name for name in templates if not renderer.has_template(name)]
    if missing:
        for name in missing:
            print(f"missing template: {name}", file=sys.stderr)
        raise SystemExit(1)
    print(f"{len(templates)} templates OK")

"""``waypoint routes`` — list the standard navigation surface."""

import argparse

from waypoint.app import STANDARD_ROUTES
from waypoint.config import AppConfig


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of PATH, VIEW, and TEMPLATE for every standard route."""
    default_route = AppConfig().default_route
    rows: list[tuple[str, str, str]] = []
    for entry in STANDARD_ROUTES:
        view_name = entry.view.__name__
        spec = entry.options.get("spec")
        if spec is not None:
            view_name = f"{view_name} ({spec.name})"
        path = f"{entry.path} (default)" if entry.path == default_route else entry.path
        rows.append((path, view_name, entry.template or "-"))

    max_path = max(max(len(r[0]) for r in rows), 4)  # "PATH" header
    max_view = max(max(len(r[1]) for r in rows), 4)  # "VIEW" header

    fmt = f"{{:<{max_path}}}  {{:<{max_view}}}  {{}}"
    print(fmt.format("PATH", "VIEW", "TEMPLATE"))
    sep_len = max_path + max_view + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for path, view_name, template in rows:
        print(fmt.format(path, view_name, template))
    print("* unmatched paths fall back to the default route")

"""CLI entrypoints for cuin commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from .config import ConfigError, CuinConfig, load_config
from .component_filter import SORT_OPTIONS
from .explorer import UnknownComponentError, UsageExplorer
from .logging import configure_logging
from .schema import ValidationError
from .search_param import parse_comma_separated, parse_prop_filters


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_payload_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "payload",
        nargs="?",
        default=None,
        help="Path to the analyzer JSON document (defaults to `payload` in .cuin.yml).",
    )
    parser.add_argument(
        "--config",
        default=".",
        help="Directory or path of the .cuin.yml to use (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cuin",
        description="Explore where UI components are used and with which props.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    components_parser = subparsers.add_parser(
        "components",
        help="List components with their package and usage count.",
    )
    _add_verbose_option(components_parser, suppress_default=True)
    _add_payload_argument(components_parser)
    components_parser.add_argument(
        "--name",
        default="",
        help="Only show components whose name contains this text (case-insensitive).",
    )
    components_parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        help="Package key to hide, e.g. external:ui@1.0.0 (repeatable or comma-separated).",
    )
    components_parser.add_argument(
        "--sort",
        choices=[value for value, _ in SORT_OPTIONS],
        default=None,
        help="Sort order for the listing.",
    )

    packages_parser = subparsers.add_parser(
        "packages",
        help="List packages ranked by how many components they provide.",
    )
    _add_verbose_option(packages_parser, suppress_default=True)
    _add_payload_argument(packages_parser)

    props_parser = subparsers.add_parser(
        "props",
        help="Show prop value distributions for one component.",
    )
    _add_verbose_option(props_parser, suppress_default=True)
    props_parser.add_argument("component_id", help="Identifier of the component to inspect.")
    _add_payload_argument(props_parser)
    props_parser.add_argument(
        "--exclude-package",
        action="append",
        default=[],
        help="Package name to hide; use '(no package)' for native elements (repeatable).",
    )
    props_parser.add_argument(
        "--filter",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Keep only usages whose prop KEY has raw VALUE (repeatable).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve the payload and its filtered views over HTTP.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_payload_argument(serve_parser)
    serve_parser.add_argument("--host", default=None, help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for cuin commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    configure_logging(verbose=bool(args.verbose), log_file=config.log_file)

    payload_path = _resolve_payload(args.payload, config)
    if payload_path is None:
        parser.exit(1, "No payload given. Pass a path or set `payload` in .cuin.yml.\n")

    try:
        explorer = UsageExplorer.from_file(payload_path, config=config)
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except ValidationError as exc:
        parser.exit(1, f"Invalid payload: {exc}\n")

    if args.command == "serve":
        from .service import run_service

        run_service(
            explorer,
            host=args.host or config.server.host,
            port=args.port or config.server.port,
        )
    elif args.command == "components":
        _print_components(explorer, args)
    elif args.command == "packages":
        _print_packages(explorer)
    elif args.command == "props":
        try:
            _print_props(explorer, args)
        except UnknownComponentError as exc:
            parser.exit(1, f"{exc}\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _resolve_payload(value: Optional[str], config: CuinConfig) -> Optional[Path]:
    if value:
        return Path(value)
    return config.payload


def _print_components(explorer: UsageExplorer, args: argparse.Namespace) -> None:
    excluded = None
    if args.exclude is not None:
        excluded = [key for item in args.exclude for key in parse_comma_separated(item)]
    components = explorer.list_components(
        name_query=args.name, excluded_packages=excluded, sort_by=args.sort
    )
    total = len(explorer.components)
    print(f"{len(components)} of {total} components in {explorer.meta.base_path}")
    for component in components:
        print(f"{component.instance_count:>6}  {component.name}  [{component.package.key}]")


def _print_packages(explorer: UsageExplorer) -> None:
    for package in explorer.packages:
        print(f"{package.count:>6}  {package.key}")


def _print_props(explorer: UsageExplorer, args: argparse.Namespace) -> None:
    component = explorer.component(args.component_id)
    store = explorer.instance_store(
        component.id,
        excluded_packages=args.exclude_package,
        prop_filters=parse_prop_filters(args.filter),
    )
    filtered = store.filtered_instances()
    print(f"{component.name}: {len(filtered)} of {len(store.instances)} usages")
    for analysis in store.props_analysis:
        marker = ""
        if store.is_prop_filtered(analysis.key):
            checked = store.get_checked_count(analysis.key)
            marker = f"  ({checked}/{store.get_all_values_count(analysis.key)})"
        print(f"{analysis.key}  {analysis.coverage:.1f}%{marker}")
        for item in analysis.values:
            shown = store.get_filtered_count(analysis.key, item.value)
            print(f"    {item.value:<30} {item.count:>5} {item.percentage:6.1f}%  shown={shown}")


if __name__ == "__main__":
    main(sys.argv[1:])

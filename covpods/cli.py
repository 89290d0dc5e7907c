"""CLI entrypoint for covpods."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Sequence

from .config import ConfigError, load_config
from .logging import configure_logging, get_logger
from .models import Pod
from .pods import collect_pods
from .scanner import CollectionError

_LOGGER = get_logger("cli")


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    verbose_default: object = argparse.SUPPRESS if suppress_default else False
    log_file_default: object = argparse.SUPPRESS if suppress_default else None
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=verbose_default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=log_file_default,
        help="Also write log records to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="covpods",
        description="Group coverage meta-data and counter-data files into pods.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    collect_parser = subparsers.add_parser(
        "collect",
        help="List the pods found in one or more coverage output directories.",
    )
    _add_logging_options(collect_parser, suppress_default=True)
    collect_parser.add_argument(
        "dirs",
        nargs="+",
        help="Coverage output directories, scanned in the order given.",
    )
    collect_parser.add_argument(
        "--origins",
        action="store_true",
        default=None,
        help="Report which input directory each counter file came from.",
    )
    collect_parser.add_argument(
        "--warn",
        action="store_true",
        default=None,
        help="Warn about counter files with no matching meta-data file.",
    )
    collect_parser.add_argument(
        "--json",
        action="store_true",
        help="Print pods as a JSON array.",
    )
    collect_parser.add_argument(
        "--config",
        type=Path,
        default=Path("."),
        help="Path to .covpods.yml or the directory holding it (defaults to current directory).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for covpods commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "collect":
        try:
            config = load_config(args.config)
        except ConfigError as exc:
            parser.exit(1, f"covpods: invalid configuration: {exc}\n")

        track_origins = config.collect.track_origins if args.origins is None else args.origins
        warn = config.collect.warn_orphans if args.warn is None else args.warn
        try:
            pods = collect_pods(
                args.dirs,
                track_origins,
                warn=warn,
                meta_prefix=config.naming.meta_prefix,
                counter_prefix=config.naming.counter_prefix,
            )
        except CollectionError as exc:
            _LOGGER.debug("Collection failed", exc_info=True)
            parser.exit(1, f"covpods collect failed: {exc}\n")

        if args.json:
            print(json.dumps([pod.to_dict() for pod in pods], indent=2))
        elif pods:
            print(format_pods(pods))
        else:
            print("No pods found")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def format_pods(pods: Sequence[Pod]) -> str:
    """Render pods as ``meta [ counters ]`` blocks, one per pod."""
    blocks: List[str] = []
    for pod in pods:
        lines = [f"{pod.meta_file} ["]
        for index, counter in enumerate(pod.counter_data_files):
            if pod.origins is not None:
                lines.append(f"{counter} o:{pod.origins[index]}")
            else:
                lines.append(counter)
        lines.append("]")
        blocks.append("\n".join(lines))
    return "\n".join(blocks)


if __name__ == "__main__":
    main(sys.argv[1:])

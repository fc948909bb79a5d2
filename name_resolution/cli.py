from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from .commands import diagnostics as cmd_diagnostics
from .commands import doctor as cmd_doctor
from .commands import resolve as cmd_resolve
from .config import find_config, load_settings
from .core.resolution.variations import VariationGenerator, VariationStrategy
from .resolver import NameResolver

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


class WarningBufferHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
        except Exception:  # pragma: no cover
            msg = record.getMessage()
        self.records.append(msg)


def configure_logging(level_name: str) -> WarningBufferHandler:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    color_handler = logging.StreamHandler(sys.stderr)
    if sys.stderr.isatty():
        color_handler.setFormatter(ColorFormatter(LOG_FORMAT))
    else:
        color_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(color_handler)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(warn_buffer)
    return warn_buffer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Business name resolution")
    parser.add_argument("--config", type=Path, help="Path to config.yaml")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve", help="Pick the candidate that names the same business as the query"
    )
    resolve_parser.add_argument("query", help="Business name to look up")
    resolve_parser.add_argument(
        "candidates",
        help="JSON file with candidate names or objects ('-' reads stdin)",
    )
    resolve_parser.add_argument(
        "--profile", default=None, help="Named resolver profile from the config"
    )
    resolve_parser.add_argument(
        "--min-score", type=float, default=None, help="Override the match threshold"
    )
    resolve_parser.add_argument(
        "--json", action="store_true", help="Emit machine-readable JSON to stdout"
    )

    score_parser = subparsers.add_parser("score", help="Score one pair of names")
    score_parser.add_argument("first", help="Query-side name")
    score_parser.add_argument("second", help="Candidate-side name")
    score_parser.add_argument(
        "--explain", action="store_true", help="Show the forms and every rule's verdict"
    )

    variations_parser = subparsers.add_parser(
        "variations", help="List the spellings a query name expands to"
    )
    variations_parser.add_argument("name", help="Query name")
    variations_parser.add_argument(
        "--strategy",
        choices=[strategy.value for strategy in VariationStrategy],
        default=None,
        help="Override the configured variation strategy",
    )
    variations_parser.add_argument(
        "--profile", default=None, help="Named resolver profile from the config"
    )

    subparsers.add_parser("doctor", help="Check the configuration")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    warn_buffer = configure_logging(args.log_level)

    try:
        config_path = find_config(args.config)
        settings = load_settings(config_path)
    except (FileNotFoundError, ValidationError, yaml.YAMLError) as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    try:
        match args.command:
            case "resolve":
                resolver = NameResolver.from_settings(settings, args.profile)
                candidates = cmd_resolve.load_candidates(args.candidates)
                cmd_resolve.run(
                    resolver,
                    args.query,
                    candidates,
                    min_score=args.min_score,
                    json_output=args.json,
                )
            case "score":
                resolver = NameResolver.from_settings(settings)
                cmd_diagnostics.run_score(
                    resolver.scorer, args.first, args.second, explain=args.explain
                )
            case "variations":
                resolver_settings = settings.resolver_for(args.profile)
                strategy = (
                    VariationStrategy(args.strategy)
                    if args.strategy
                    else resolver_settings.strategy
                )
                generator = VariationGenerator(
                    vocabulary=settings.vocabulary.build(),
                    strategy=strategy,
                    max_variations=resolver_settings.max_variations,
                )
                cmd_diagnostics.run_variations(generator, args.name)
            case "doctor":
                report = cmd_doctor.run(
                    settings, str(config_path) if config_path else None
                )
                for line in report.checks:
                    print(line)
                if not report.ok:
                    raise SystemExit(1)
            case _:
                parser.error("Unknown command")
    except (ValueError, OSError) as exc:
        raise SystemExit(f"{args.command}: {exc}") from exc
    finally:
        if warn_buffer.records:
            print("\n\033[33mWarnings/Errors summary:\033[0m", file=sys.stderr)
            for line in warn_buffer.records:
                print(f" - {line}", file=sys.stderr)


if __name__ == "__main__":  # pragma: no cover
    main()

"""Command-line entry point for charforge."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from typing import Any

import structlog

from charforge.config import Settings, get_settings
from charforge.game.engine import CharacterBuilder

logger = structlog.get_logger(__name__)


def configure_logging(settings: Settings) -> None:
    """
    Configure structlog from settings.

    ``log_format`` selects human-readable console output or JSON lines.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer: Any
    if settings.log_format.lower() == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def format_sheet(sheet: dict[str, Any]) -> str:
    """Render a character sheet as plain text."""
    lines = [f"Character {sheet['id']}", "", "Attributes"]
    for attr in sheet["attributes"]:
        lines.append(f"  {attr['name']}: {attr['score']} (Modifier: {attr['modifier']:+d})")
    lines.append(f"  Total: {sheet['attribute_total']}/{sheet['attribute_budget']}")
    lines += ["", "Skills"]
    for skill in sheet["skills"]:
        total = "-" if skill["total"] is None else skill["total"]
        lines.append(
            f"  {skill['name']} Points: {skill['points']} "
            f"(Modifier: {skill['attribute']}) Total: {total}"
        )
    return "\n".join(lines)


def format_catalog(builder: CharacterBuilder) -> str:
    """Render the static catalogs as plain text."""
    lines = ["Attributes", *(f"  {name}" for name in builder.attribute_names), "", "Classes"]
    for class_name, class_def in builder.class_list.items():
        reqs = ", ".join(f"{k} {v}" for k, v in class_def.requirements.items())
        lines.append(f"  {class_name}: {reqs}")
    lines += ["", "Skills"]
    lines += [f"  {skill.name} ({skill.attribute_modifier})" for skill in builder.skill_list]
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(prog="charforge", description="Character build engine")
    parser.add_argument("--api-url", default=None, help="Override the remote store URL")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("catalog", help="Show attributes, classes and skills")
    sub.add_parser("load", help="Load a character from the remote store and print it")
    new = sub.add_parser("new", help="Create a default character and print it")
    new.add_argument("--save", action="store_true", help="Save it to the remote store")
    return parser


async def main(argv: Sequence[str] | None = None) -> int:
    """
    Async entry point.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.api_url:
        settings = settings.model_copy(update={"api_url": args.api_url})
    configure_logging(settings)

    builder = CharacterBuilder(settings=settings, notify=lambda msg: print(msg, file=sys.stderr))

    if args.command == "catalog":
        print(format_catalog(builder))
        return 0

    if args.command == "load":
        character = await builder.load_character()
        if character is None:
            return 1
        print(format_sheet(builder.character_sheet(len(builder.store) - 1)))
        return 0

    character = builder.add_character()
    print(format_sheet(builder.character_sheet(len(builder.store) - 1)))
    if args.save and not await builder.save_character(character):
        return 1
    return 0


def run() -> None:
    """
    Synchronous entry point that runs the async main function.

    This is the function that should be called from the command line.
    """
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("stopped_by_user")


if __name__ == "__main__":
    run()

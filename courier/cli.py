"""Command-line entry point for Courier."""

import argparse
from typing import Optional, Sequence

from rich.console import Console

from courier.core.models import Draft
from courier.demo import seeded_api
from courier.features.compose import ComposeMode
from courier.utils.config import ConfigManager
from courier.utils.errors import CourierError, format_error_message
from courier.utils.logging import get_logger, init_logging, log_call

logger = get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


## Parser


def setup_argument_parser() -> argparse.ArgumentParser:
    """Build the ``courier`` argument parser."""

    parser = argparse.ArgumentParser(
        prog="courier",
        description="Courier - terminal mail composition",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compose_parser = subparsers.add_parser(
        "compose",
        help="Compose a message",
        description="Open the compose screen against the demo mailbox"
    )
    compose_parser.add_argument(
        "--mode",
        default=ComposeMode.NEW.value,
        choices=[mode.value for mode in ComposeMode],
        help="Compose mode (default: new)"
    )
    compose_parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level (default: from configuration)"
    )

    return parser


## Commands


@log_call
def run_compose(mode: ComposeMode, console: Console) -> int:
    """Run the compose screen and report the outcome.

    Returns:
        Exit code (0 = sent or left cleanly)
    """
    from courier.tui import CourierApp

    api, message, draft = seeded_api()
    source = message if mode in (ComposeMode.REPLY, ComposeMode.REPLY_ALL, ComposeMode.FORWARD) else None
    edit: Optional[Draft] = draft if mode is ComposeMode.EDIT_DRAFT else None

    app = CourierApp(api, mode, source=source, draft=edit)
    sent = app.run()

    if sent is not None:
        recipients = ", ".join(p.format() for p in sent.to)
        console.print(f"[green]Sent '{sent.subject}' to {recipients}[/green]")
    else:
        console.print("[yellow]Compose closed without sending[/yellow]")

    if api.drafts:
        console.print(f"[dim]Drafts on server: {len(api.drafts)}[/dim]")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code
    """
    console = Console()
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = ConfigManager()
        init_logging(args.log_level or config.config.logging.log_level)
    except CourierError as e:
        logger.error(f"Configuration error: {e}")
        console.print(f"[red]Configuration error: {format_error_message(e)}[/red]")
        return 1

    try:
        match args.command:
            case "compose":
                return run_compose(ComposeMode.from_string(args.mode), console)
            case _:
                parser.error(f"Unknown command: {args.command}")
                return 2

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130  # Standard SIGINT exit code


if __name__ == "__main__":
    raise SystemExit(main())

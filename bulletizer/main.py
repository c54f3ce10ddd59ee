"""
Main CLI interface for the Transcript Bulletizer.

This module provides the Typer-based command-line interface with commands for:
- Bulletizing a transcript given as text or read from a file
- Running the built-in sample transcripts
"""

import json
import logging
import os
import sys
from contextlib import nullcontext
from pathlib import Path
from typing import List, Optional, Tuple

import pyperclip
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .core.bulletizer import TranscriptBulletizer
from .core.config import ConfigError, config, load_env_file
from .core.progress import reporter
from .core.render import ResultRenderer
from .core.types import BulletGroup, BulletizedResult

app = typer.Typer(
    name="bulletizer",
    help="Transcript Bulletizer CLI - Turn rambling voice notes into grouped bullet points",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

OUTPUT_FORMATS = ("rich", "markdown", "plain", "json")

GROUP_STYLES = {
    BulletGroup.ACTIONS: "yellow",
    BulletGroup.IDEAS: "cyan",
    BulletGroup.KEY_POINTS: "magenta",
    BulletGroup.NOTES: "dim",
}

SAMPLE_TRANSCRIPTS: List[Tuple[str, str]] = [
    (
        "Mixed task dump",
        "So I was thinking about the app redesign and we need to update the onboarding flow to feel more welcoming. "
        "Also we should add a dark mode toggle in settings. And remind me to send the client proposal by Friday.",
    ),
    (
        "Work brain dump",
        "Okay so the invoice for Johnson and Associates needs to go out today and I need to follow up with Sarah about "
        "the design mockups and the deadline is next Thursday. Also we need to book the conference room for the "
        "retrospective and I should update the project tracker. The marketing team wants to announce the new feature "
        "by end of month and we should put together a press release and also reach out to the beta users for feedback. "
        "And don't forget we need to hire two more engineers so I should post the job listings on LinkedIn and also "
        "update the careers page. The onboarding needs a lot of work too we should simplify the first three steps and "
        "add some tooltips and make sure the empty state looks better. Oh and we need to review the analytics dashboard "
        "and present the Q3 numbers to the board next Wednesday.",
    ),
    (
        "Journal entry",
        "Today was a really good day. I went to the gym in the morning and it felt great. Had a productive meeting with "
        "the team and we mapped out the roadmap for the rest of the year. I'm feeling grateful and I want to keep this "
        "momentum going. One thing I want to work on is being more consistent with deep work blocks and not checking "
        "email until noon.",
    ),
    (
        "Idea burst",
        "What if we added a weekly digest email showing your best notes from the past week. And maybe a streak counter "
        "for consecutive recording days. Also think it could be cool to have a private locked drawer only accessible "
        "with Face ID. And what if users could share individual notes as beautiful images on social media.",
    ),
    ("Single sentence", "Don't forget to call mom tomorrow."),
]


def _configure_logging(debug: bool) -> None:
    """Route log records through rich; DEBUG when --debug is given, else BZ_LOG_LEVEL."""
    level = logging.DEBUG if debug else config.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _prepare_environment(env_file: Optional[str], debug: bool) -> TranscriptBulletizer:
    """Load the env file, apply the debug flag and build a bulletizer from the effective settings."""
    load_env_file(env_file)

    # CLI flag always overrides .env
    if debug:
        os.environ["BZ_DEBUG"] = "1"
    _configure_logging(debug or config.debug)

    return TranscriptBulletizer(settings=config.settings())


def _validate_format(output_format: str) -> None:
    if output_format not in OUTPUT_FORMATS:
        err_console.print(f"[bold red]Error:[/bold red] Unsupported format '{output_format}'. Choose one of: {', '.join(OUTPUT_FORMATS)}")
        sys.exit(1)


def _copy_to_clipboard(text: str) -> bool:
    """Copy text to the clipboard; clipboard failures never break the command."""
    try:
        pyperclip.copy(text)
        return True
    except pyperclip.PyperclipException as e:
        logging.getLogger(__name__).debug("Clipboard unavailable: %s", e)
        return False


@app.command()
def bulletize(
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Transcript text to bulletize"),
    file: Optional[str] = typer.Option(None, "--file", help="Path to file containing transcript text"),
    output_format: str = typer.Option("rich", "--format", "-f", help="Output format (rich, markdown, plain, json)"),
    copy: bool = typer.Option(True, "--copy/--no-copy", help="Copy the plain-text bullets to the clipboard"),
    env_file: Optional[str] = typer.Option(None, "--env-file", help="Explicit .env file to load settings from"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging and stage timings"),
):
    """
    Bulletize a transcript into grouped bullet points.

    Examples:
        bulletizer bulletize --text "Don't forget to call mom tomorrow."
        bulletizer bulletize --file note.txt --format markdown
        bulletizer bulletize --file note.txt --format json --no-copy
    """
    _validate_format(output_format)

    try:
        # Validate input options
        if text and file:
            err_console.print("[bold red]Error:[/bold red] Cannot specify both --text and --file options")
            sys.exit(1)

        if text is None and not file:
            err_console.print("[bold red]Error:[/bold red] Must specify either --text or --file option")
            sys.exit(1)

        bulletizer = _prepare_environment(env_file, debug)

        show_progress = output_format == "rich"
        progress = reporter.initialize(err_console, "Reading transcript…") if show_progress else nullcontext()
        with progress:
            # Read transcript from file if specified
            if file:
                file_path = Path(file)
                if not file_path.exists():
                    err_console.print(f"[bold red]Error:[/bold red] File not found: {file}")
                    sys.exit(1)

                try:
                    text = file_path.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as e:
                    err_console.print(f"[bold red]Error:[/bold red] Failed to read file '{file}': {e}")
                    sys.exit(1)

            # Ensure text is not None at this point
            assert text is not None, "Text should not be None after validation"

            if show_progress:
                reporter.step("Extracting bullets…")
            result = bulletizer.bulletize_structured(text)
            if show_progress:
                reporter.complete_step()

        _display_result(result, output_format, source_words=len(text.split()))

        if copy and not result.is_empty:
            _copy_to_clipboard(result.plain_text)

    except ConfigError as e:
        err_console.print(f"[bold red]Configuration Error:[/bold red] {e}")
        sys.exit(1)


@app.command()
def samples(
    output_format: str = typer.Option("rich", "--format", "-f", help="Output format (rich, markdown, plain, json)"),
    env_file: Optional[str] = typer.Option(None, "--env-file", help="Explicit .env file to load settings from"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging and stage timings"),
):
    """
    Run the built-in sample transcripts and show their bullets.

    Examples:
        bulletizer samples
        bulletizer samples --format json
    """
    _validate_format(output_format)

    try:
        bulletizer = _prepare_environment(env_file, debug)
    except ConfigError as e:
        err_console.print(f"[bold red]Configuration Error:[/bold red] {e}")
        sys.exit(1)

    results = [(label, sample, bulletizer.bulletize_structured(sample)) for label, sample in SAMPLE_TRANSCRIPTS]

    if output_format == "json":
        payload = [{"label": label, "words": len(sample.split()), "result": _result_payload(result)} for label, sample, result in results]
        console.print_json(json.dumps(payload))
        return

    for label, sample, result in results:
        if output_format == "rich":
            console.print(f"\n[bold]── {label} ({len(sample.split())} words) ──[/bold]")
        else:
            console.print(f"\n{label} ({len(sample.split())} words)", markup=False, highlight=False)
        _display_result(result, output_format, source_words=len(sample.split()))


def _result_payload(result: BulletizedResult) -> dict:
    """JSON-ready view of a result."""
    return {
        "groups": [{"group": item.group.value, "bullets": list(item.bullets)} for item in result.groups],
        "plain_text": result.plain_text,
        "bullet_count": len(result.all_bullets),
    }


def _display_result(result: BulletizedResult, output_format: str, source_words: int = 0) -> None:
    """Display a bulletized result in the specified format."""
    renderer = ResultRenderer()

    if output_format == "json":
        console.print_json(json.dumps(_result_payload(result)))
        return

    if output_format in ("markdown", "plain"):
        console.print(renderer.render(result, output_format), markup=False, highlight=False, soft_wrap=True)
        return

    # Rich format (default)
    if result.is_empty:
        console.print("[yellow]No bullets could be extracted from this transcript[/yellow]")
        return

    for item in result.groups:
        style = GROUP_STYLES[item.group]
        body = "\n".join(f"• {bullet}" for bullet in item.bullets)
        console.print(Panel(body, title=f"[bold {style}]{item.group.value.upper()}[/bold {style}]", title_align="left", border_style=style))

    stats_table = Table(show_header=False, box=None)
    stats_table.add_column("Key", style="cyan")
    stats_table.add_column("Value", style="white")
    stats_table.add_row("Bullets", str(len(result.all_bullets)))
    stats_table.add_row("Groups", ", ".join(item.group.value for item in result.groups))
    if source_words:
        stats_table.add_row("Source words", str(source_words))
    console.print(stats_table)


if __name__ == "__main__":
    app()

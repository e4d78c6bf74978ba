"""CLI entry point for Storydeck."""

import json
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from storydeck import __version__
from storydeck.config import load_config as load_config_file
from storydeck.core.story_parser import parse_stories
from storydeck.models.config import Config
from storydeck.utils.logging import configure_logging, get_logger


logger = get_logger(__name__)
console = Console()


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from the given path or ~/.config/storydeck/config.yaml.

    Returns:
        Validated Config instance

    Raises:
        click.ClickException: If the config file is invalid or fails validation
    """
    try:
        config = load_config_file(config_path)
        logger.info("config_loaded", path=str(config_path) if config_path else "default")
        return config
    except Exception as e:
        logger.error("config_validation_error", error=str(e))
        raise click.ClickException(f"Configuration validation failed:\n{e}")


@click.group()
@click.version_option(version=__version__, prog_name="storydeck")
def cli():
    """Storydeck: turn a free-text command into user story cards."""
    configure_logging()


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file (default: ~/.config/storydeck/config.yaml)",
)
def run(config_path: Optional[Path]):
    """
    Launch the interactive story widget.

    Press the launcher button, type a command, refine the generated document
    and submit it to review the resulting cards. Escape or a click outside
    the widget collapses it again.
    """
    logger.info("run_command_started", config_path=str(config_path) if config_path else None)
    config = load_config(config_path)

    from storydeck.tui.app import StorydeckApp

    app = StorydeckApp(config=config)
    app.run()

    logger.info("run_command_completed")


@cli.command()
@click.argument("markdown_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print cards as JSON instead of panels")
def parse(markdown_file: Path, as_json: bool):
    """
    Parse a markdown document into story cards and print them.

    Examples:
        storydeck parse stories.md
        storydeck parse stories.md --json
    """
    logger.info("parse_command_started", path=str(markdown_file), as_json=as_json)

    try:
        document = markdown_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("document_read_error", path=str(markdown_file), error=str(e))
        raise click.ClickException(f"Could not read {markdown_file}: {e}")

    cards = parse_stories(document)

    if as_json:
        click.echo(json.dumps([card.model_dump() for card in cards], indent=2))
    elif not cards:
        click.echo("No stories found.")
    else:
        _display_cards(cards)

    logger.info("parse_command_completed", num_cards=len(cards))


def _display_cards(cards) -> None:
    """Display cards as titled panels with rendered markdown bodies."""
    for idx, card in enumerate(cards, 1):
        body = Markdown(card.content) if card.content else ""
        console.print(Panel(body, title=f"{idx}. {card.title}", title_align="left"))


def main():
    """Main entry point for setuptools console script."""
    cli()


if __name__ == "__main__":
    main()

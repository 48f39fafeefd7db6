"""Command-line interface for bkm."""

import asyncio
import logging
import re
import shlex
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import click

from . import __version__
from .config import ConfigError, ConfigManager
from .core.bookmark_usecases import (
    AddBookmark,
    EditBookmark,
    GetBookmark,
    ListBookmarks,
    RemoveBookmark,
    TagBookmark,
    UntagBookmark,
)
from .core.config_usecases import (
    GetConfig,
    GetFuzzyFinderConfig,
    ListConfig,
    RemoveConfig,
    SetConfig,
    SetFuzzyFinderConfig,
)
from .core.search import SearchBookmarks
from .models.bookmark import Bookmark
from .models.fuzzy_finder import FUZZY_ARGS_KEY, FUZZY_COMMAND_KEY
from .models.result import Err

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def _split_tags(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def _resolve(result, failure_message: str):
    """Return the Ok value, or print every error and exit with status 1."""
    if isinstance(result, Err):
        click.echo(f"[ERROR] {failure_message}:", err=True)
        for message in result.messages():
            click.echo(f"  {message}", err=True)
        sys.exit(1)
    return result.value


def _echo_bookmark(bookmark: Bookmark) -> None:
    click.echo(f"{bookmark.id}  {bookmark.title}")
    click.echo(f"    {bookmark.url}")
    if bookmark.tags:
        click.echo(f"    tags: {', '.join(tag.value for tag in bookmark.tags)}")


def _picker_line(bookmark: Bookmark) -> str:
    """One `title<TAB>url` line; tabs and newlines in the title become spaces."""
    title = re.sub(r"[\t\r\n]", " ", bookmark.title.value)
    return f"{title}\t{bookmark.url}"


def _prompt_bookmark_data() -> Optional[dict]:
    """Ask for URL, title and tags. Returns None if the user declines."""
    click.echo("Add New Bookmark")
    click.echo("=" * 16)

    url = click.prompt("Enter bookmark URL", type=str).strip()
    title = click.prompt("Enter bookmark title", default=url, type=str)
    tags = _split_tags(
        click.prompt("Enter tags (comma-separated, optional)", default="", show_default=False)
    )

    click.echo("\nBookmark Summary:")
    click.echo(f"URL: {url}")
    click.echo(f"Title: {title}")
    click.echo(f"Tags: {', '.join(tags) if tags else 'None'}")

    if not click.confirm("Add this bookmark?", default=True):
        return None

    return {"url": url, "title": title, "tags": tags}


@click.group()
@click.version_option(version=__version__, prog_name="bkm")
@click.option(
    "--data-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Data directory (default: $BKM_DATA_DIR or ~/.local/share/bkm)",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Print debug messages")
@click.pass_context
def cli(ctx: click.Context, data_dir: Optional[Path], verbose: bool):
    """bkm - bookmark manager with fuzzy finder integration."""
    try:
        cm = ConfigManager(data_dir)
        cm.ensure_data_dir()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _configure_logging("DEBUG" if verbose else cm.settings.log_level)
    logger.debug(f"Using data directory {cm.data_dir}")

    ctx.obj = cm


@cli.command()
@click.option("--url", type=str, default=None, help="Bookmark URL")
@click.option("-t", "--title", type=str, default=None, help="Bookmark title (default: the URL)")
@click.option("--tags", type=str, default=None, help="Comma-separated tags")
@click.pass_obj
def add(cm: ConfigManager, url: Optional[str], title: Optional[str], tags: Optional[str]):
    """Add a new bookmark.

    Prompts for the details when --url is not given.
    """
    if url:
        data = {"url": url, "title": title or url, "tags": _split_tags(tags)}
    else:
        data = _prompt_bookmark_data()
        if data is None:
            click.echo("Cancelled")
            return

    usecase = AddBookmark(
        cm.bookmark_repository(),
        reject_duplicate_titles=cm.settings.unique_titles,
    )
    bookmark = _resolve(
        asyncio.run(usecase.execute(data["url"], data["title"], data["tags"])),
        "Failed to add bookmark",
    )

    click.echo("[OK] Bookmark added")
    click.echo(f"ID: {bookmark.id}")


@cli.command()
@click.argument("bookmark_id")
@click.option("--url", type=str, default=None, help="New URL")
@click.option("-t", "--title", type=str, default=None, help="New title")
@click.option("--tags", type=str, default=None, help="New comma-separated tags (replaces all)")
@click.pass_obj
def edit(
    cm: ConfigManager,
    bookmark_id: str,
    url: Optional[str],
    title: Optional[str],
    tags: Optional[str],
):
    """Edit a bookmark. Options left out keep their current value."""
    repository = cm.bookmark_repository()
    current = _resolve(
        asyncio.run(GetBookmark(repository).execute(bookmark_id)),
        "Failed to edit bookmark",
    )

    new_tags = _split_tags(tags) if tags is not None else [t.value for t in current.tags]
    bookmark = _resolve(
        asyncio.run(
            EditBookmark(repository).execute(
                bookmark_id,
                url if url is not None else current.url.value,
                title if title is not None else current.title.value,
                new_tags,
            )
        ),
        "Failed to edit bookmark",
    )

    click.echo("[OK] Bookmark updated")
    _echo_bookmark(bookmark)


@cli.command()
@click.argument("bookmark_id")
@click.pass_obj
def remove(cm: ConfigManager, bookmark_id: str):
    """Remove a bookmark."""
    _resolve(
        asyncio.run(RemoveBookmark(cm.bookmark_repository()).execute(bookmark_id)),
        "Failed to remove bookmark",
    )
    click.echo(f"[OK] Bookmark removed: {bookmark_id}")


@cli.command(name="list")
@click.option("--tag", type=str, default=None, help="Only bookmarks with this tag")
@click.pass_obj
def list_bookmarks(cm: ConfigManager, tag: Optional[str]):
    """List bookmarks."""
    bookmarks = _resolve(
        asyncio.run(ListBookmarks(cm.bookmark_repository()).execute(tag)),
        "Failed to list bookmarks",
    )

    if not bookmarks:
        click.echo("No bookmarks found")
        return

    for bookmark in bookmarks:
        _echo_bookmark(bookmark)


@cli.command()
@click.argument("query")
@click.pass_obj
def search(cm: ConfigManager, query: str):
    """Search titles, URLs and tags (case-insensitive)."""
    bookmarks = _resolve(
        asyncio.run(SearchBookmarks(cm.bookmark_repository()).execute(query)),
        "Search failed",
    )

    if not bookmarks:
        click.echo("No bookmarks found")
        return

    for bookmark in bookmarks:
        _echo_bookmark(bookmark)


@cli.group()
def tag():
    """Add or remove tags on a bookmark."""
    pass


@tag.command(name="add")
@click.argument("bookmark_id")
@click.argument("tag_name")
@click.pass_obj
def tag_add(cm: ConfigManager, bookmark_id: str, tag_name: str):
    """Add TAG_NAME to a bookmark."""
    bookmark = _resolve(
        asyncio.run(TagBookmark(cm.bookmark_repository()).execute(bookmark_id, tag_name)),
        "Failed to add tag",
    )
    click.echo("[OK] Tag added")
    _echo_bookmark(bookmark)


@tag.command(name="remove")
@click.argument("bookmark_id")
@click.argument("tag_name")
@click.pass_obj
def tag_remove(cm: ConfigManager, bookmark_id: str, tag_name: str):
    """Remove TAG_NAME from a bookmark."""
    bookmark = _resolve(
        asyncio.run(UntagBookmark(cm.bookmark_repository()).execute(bookmark_id, tag_name)),
        "Failed to remove tag",
    )
    click.echo("[OK] Tag removed")
    _echo_bookmark(bookmark)


@cli.group()
def config():
    """Manage configuration settings."""
    pass


@config.command()
@click.option("--command", "command", type=str, default=None, help="Fuzzy finder command (e.g. fzf, peco)")
@click.option("--args", "args", type=str, default=None, help="Fuzzy finder arguments")
@click.pass_obj
def fuzzy(cm: ConfigManager, command: Optional[str], args: Optional[str]):
    """Configure the fuzzy finder. Without options, show current settings."""
    repository = cm.config_repository()

    if command is None and args is None:
        stored_command = _resolve(
            asyncio.run(GetConfig(repository).execute(FUZZY_COMMAND_KEY)),
            "Failed to read fuzzy finder command",
        )
        stored_args = _resolve(
            asyncio.run(GetConfig(repository).execute(FUZZY_ARGS_KEY)),
            "Failed to read fuzzy finder args",
        )
        click.echo("Current fuzzy finder configuration:")
        click.echo(f"  Command: {stored_command or 'not set'}")
        click.echo(f"  Args: {stored_args or 'not set'}")
        return

    _resolve(
        asyncio.run(SetFuzzyFinderConfig(repository).update(command=command, args=args)),
        "Failed to save fuzzy finder settings",
    )

    if command is not None:
        click.echo(f"[OK] Fuzzy finder command set to: {command}")
    if args is not None:
        click.echo(f"[OK] Fuzzy finder args set to: {args}")


@config.command(name="get")
@click.argument("key")
@click.pass_obj
def config_get(cm: ConfigManager, key: str):
    """Print the value stored under KEY."""
    value = _resolve(
        asyncio.run(GetConfig(cm.config_repository()).execute(key)),
        "Failed to read config",
    )
    if value is None:
        click.echo(f"{key}: not set", err=True)
        sys.exit(1)
    click.echo(value)


@config.command(name="set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
def config_set(cm: ConfigManager, key: str, value: str):
    """Store VALUE under KEY."""
    _resolve(
        asyncio.run(SetConfig(cm.config_repository()).execute(key, value)),
        "Failed to save config",
    )
    click.echo(f"[OK] {key} set")


@config.command(name="unset")
@click.argument("key")
@click.pass_obj
def config_unset(cm: ConfigManager, key: str):
    """Remove KEY from the config store."""
    _resolve(
        asyncio.run(RemoveConfig(cm.config_repository()).execute(key)),
        "Failed to remove config",
    )
    click.echo(f"[OK] {key} removed")


@config.command(name="list")
@click.pass_obj
def config_list(cm: ConfigManager):
    """Print every stored key and value."""
    entries = _resolve(
        asyncio.run(ListConfig(cm.config_repository()).execute()),
        "Failed to read config",
    )
    if not entries:
        click.echo("No configuration set")
        return

    for key, value in entries.items():
        click.echo(f"{key}={value}")


@cli.command()
@click.pass_obj
def pick(cm: ConfigManager):
    """Choose a bookmark with the fuzzy finder and print its URL."""
    bookmarks = _resolve(
        asyncio.run(ListBookmarks(cm.bookmark_repository()).execute()),
        "Failed to list bookmarks",
    )
    if not bookmarks:
        click.echo("No bookmarks found", err=True)
        sys.exit(1)

    finder = _resolve(
        asyncio.run(GetFuzzyFinderConfig(cm.config_repository()).execute()),
        "Invalid fuzzy finder configuration",
    )
    command_line = finder.get_command_line()
    lines = "\n".join(_picker_line(b) for b in bookmarks) + "\n"

    try:
        argv = shlex.split(command_line)
    except ValueError as e:
        click.echo(f"Error: cannot parse fuzzy finder command '{command_line}': {e}", err=True)
        sys.exit(1)

    try:
        completed = subprocess.run(
            argv,
            input=lines,
            stdout=subprocess.PIPE,
            text=True,
        )
    except FileNotFoundError:
        click.echo(f"Error: fuzzy finder not found: {finder.command}", err=True)
        sys.exit(1)

    selection = completed.stdout.strip()
    if completed.returncode != 0 or not selection:
        logger.debug(f"{command_line} exited with {completed.returncode}")
        sys.exit(1)

    click.echo(selection.splitlines()[0].rsplit("\t", 1)[-1])


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()

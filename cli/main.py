"""CLI entry point: novelshelf web novel library.

Usage:
  novelshelf add URL                 scrape a novel into the library
  novelshelf list                    list stored novels
  novelshelf read -n 1 -c 3          read a chapter (fetches it on first read)
  novelshelf translate -n 1 -c 3     translate a chapter
  novelshelf --help                  show all commands
"""

import logging
import os
import sys
from pathlib import Path

# Ensure UTF-8 output on Windows to avoid encoding errors with Rich
if sys.platform == "win32":
    os.environ.setdefault("PYTHONIOENCODING", "utf-8")

import click
from rich.panel import Panel
from rich.table import Table

from cli.theme import (
    get_console,
    app_header,
    success_panel,
    novel_summary_panel,
    chapter_table,
    glossary_table,
)
from config.settings import Settings
from config.logging_config import setup_logging
from models.chapter_store import sort_chapters
from services.actions import ActionResult, open_library
from tools.glossary import search_glossary

console = get_console()


def _init_logging(verbose: bool, settings: Settings):
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    setup_logging(level=level, log_dir=settings.log_dir, console_enabled=verbose)


def _unwrap(result: ActionResult):
    """Return the action payload, or print the error and exit with status 1."""
    if not result.success:
        console.print(f"[error]{result.error}[/]")
        sys.exit(1)
    return result.data


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, verbose):
    """novelshelf: library manager for scraped and machine-translated web novels.

    \b
    Examples:
      novelshelf add https://example.com/book/123
      novelshelf show -n 1
      novelshelf translate -n 1 -c 1-5
    """
    settings = Settings()
    _init_logging(verbose, settings)
    ctx.obj = settings


# ---------------------------------------------------------------------------
# Library commands
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("url")
@click.pass_obj
def add(settings, url):
    """Scrape a novel from URL and add it to the library."""
    with console.status("Scraping novel..."):
        with open_library(settings) as actions:
            novel = _unwrap(actions.scrape_novel(url))

    console.print(success_panel(
        "Novel added",
        f"  [stat.label]Title:[/] [bold]{novel.title}[/] [muted](ID: {novel.id})[/]\n"
        f"  [stat.label]Author:[/] {novel.author or '-'}\n"
        f"  [stat.label]Chapters:[/] [stat.value]{len(novel.chapters)}[/]",
    ))


@cli.command(name="list")
@click.pass_obj
def list_novels(settings):
    """List all novels, most recently added first."""
    with open_library(settings) as actions:
        novels = _unwrap(actions.get_all_novels())

    console.print(app_header())
    if not novels:
        console.print("[warning]The library is empty. Use [info]novelshelf add URL[/] to add a novel.[/]")
        return

    table = Table(title="Library", show_lines=True, border_style="dim")
    table.add_column("ID", style="chapter.num")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Chapters", justify="right")
    table.add_column("Translated", justify="right")

    for n in novels:
        table.add_row(
            str(n.id),
            n.title,
            n.author or "-",
            str(len(n.chapters)),
            f"{n.translated_count} [muted]({n.translation_progress:.0f}%)[/]",
        )

    console.print(table)


@cli.command()
@click.option("--novel-id", "-n", required=True, type=int, help="Novel ID")
@click.option("--desc", is_flag=True, help="List chapters newest first")
@click.pass_obj
def show(settings, novel_id, desc):
    """Show a novel's details and chapter list."""
    with open_library(settings) as actions:
        novel = _unwrap(actions.get_novel_by_id(novel_id))

    console.print(app_header())
    console.print(novel_summary_panel(novel))
    console.print()
    if novel.chapters:
        console.print(chapter_table(sort_chapters(novel.chapters, descending=desc)))
    else:
        console.print("[warning]No chapters stored.[/]")


@cli.command()
@click.pass_obj
def stats(settings):
    """Show library-wide statistics."""
    with open_library(settings) as actions:
        library_stats = _unwrap(actions.get_library_stats())

    recent = ", ".join(f"{n.title} [muted](ID: {n.id})[/]" for n in library_stats.recently_added) or "-"
    console.print(app_header())
    console.print(Panel(
        f"  [stat.label]Novels:[/] [stat.value]{library_stats.total_novels}[/]  "
        f"[muted]|[/]  [stat.label]Chapters:[/] [stat.value]{library_stats.total_chapters:,}[/]  "
        f"[muted]|[/]  [stat.label]Translated:[/] [stat.value]{library_stats.translated_chapters:,}[/]\n"
        f"  [stat.label]Recently added:[/] {recent}",
        title="[bold]Library stats[/]",
        border_style="dim",
        padding=(0, 2),
    ))


@cli.command()
@click.option("--novel-id", "-n", required=True, type=int, help="Novel ID")
@click.option("--title", default=None, help="New title")
@click.option("--author", default=None, help="New author")
@click.pass_obj
def rename(settings, novel_id, title, author):
    """Edit a novel's title and/or author."""
    with open_library(settings) as actions:
        _unwrap(actions.update_novel_metadata(novel_id, title=title, author=author))
    console.print(f"[success]Novel {novel_id} updated[/]")


@cli.command()
@click.option("--novel-id", "-n", required=True, type=int, help="Novel ID")
@click.pass_obj
def update(settings, novel_id):
    """Fetch the novel's source again and append new chapters."""
    with console.status("Checking source for new chapters..."):
        with open_library(settings) as actions:
            added = _unwrap(actions.update_novel_from_source(novel_id))

    if added:
        console.print(f"[success]{added} new chapter(s) added[/]")
    else:
        console.print("[info]No new chapters. The novel is up to date.[/]")


# ---------------------------------------------------------------------------
# Chapter commands
# ---------------------------------------------------------------------------

def _parse_chapter_numbers(arg: str) -> list[str]:
    """Parse chapter selection argument into a list of chapter labels.

    Supported formats:
      "30"      -> ["30"]              (single chapter)
      "1-30"    -> ["1", ..., "30"]    (range)
      "1,5,10"  -> ["1", "5", "10"]    (comma-separated)
    """
    arg = arg.strip()
    if "," in arg:
        return [x.strip() for x in arg.split(",") if x.strip()]

    if "-" in arg:
        start, _, end = arg.partition("-")
        try:
            start_num, end_num = int(start), int(end)
        except ValueError:
            raise click.BadParameter(f"Invalid chapter range: {arg} (use 30, 1-30 or 1,5,10)")
        if start_num > end_num:
            raise click.BadParameter(f"Invalid chapter range: {arg} (start is after end)")
        return [str(n) for n in range(start_num, end_num + 1)]

    if not arg:
        raise click.BadParameter("Empty chapter selection")
    return [arg]


@cli.command()
@click.option("--novel-id", "-n", required=True, type=int, help="Novel ID")
@click.option("--chapter", "-c", required=True, help="Chapter number")
@click.option("--original", "-o", is_flag=True, help="Show the source text even if translated")
@click.pass_obj
def read(settings, novel_id, chapter, original):
    """Read a chapter; its text is fetched and saved on first read."""
    with console.status("Loading chapter..."):
        with open_library(settings) as actions:
            view = _unwrap(actions.read_chapter(novel_id, chapter))

    ch = view.chapter
    translated = ch.is_translated and not original
    body = ch.translation if translated else (view.content or "[muted]No content available.[/]")
    title = ch.translated_chapter_title if translated and ch.translated_chapter_title else ch.chapter_name

    console.print(app_header(view.novel.title))
    console.print(Panel(
        body,
        title=f"[chapter.num]{ch.chapter_number}[/] [bold]{title}[/]",
        border_style="dim",
        padding=(1, 2),
    ))

    nav = []
    if view.prev_chapter:
        nav.append(f"prev: [chapter.num]{view.prev_chapter.chapter_number}[/]")
    if view.next_chapter:
        nav.append(f"next: [chapter.num]{view.next_chapter.chapter_number}[/]")
    if nav:
        console.print("[muted]" + "  |  ".join(nav) + "[/]")


@cli.command()
@click.option("--novel-id", "-n", required=True, type=int, help="Novel ID")
@click.option("--chapters", "-c", required=True, help="Chapters, e.g. '3', '1-5' or '1,3,5'")
@click.option("--retranslate", "-r", is_flag=True, help="Merge into the existing glossary instead of replacing it")
@click.pass_obj
def translate(settings, novel_id, chapters, retranslate):
    """Translate chapters through the translation service."""
    chapter_list = _parse_chapter_numbers(chapters)
    failures = 0

    with open_library(settings) as actions:
        for number in chapter_list:
            with console.status(f"Translating chapter {number}..."):
                view = actions.read_chapter(novel_id, number)
                if not view.success:
                    console.print(f"[error]Chapter {number}: {view.error}[/]")
                    failures += 1
                    continue
                if not view.data.content:
                    console.print(f"[error]Chapter {number}: no source text to translate[/]")
                    failures += 1
                    continue

                translate_action = actions.retranslate_chapter if retranslate else actions.translate_chapter
                result = translate_action(novel_id, number, view.data.content)

            if result.success:
                console.print(f"[success]Chapter {number} translated[/] [muted]({len(result.data):,} chars)[/]")
            else:
                console.print(f"[error]Chapter {number}: {result.error}[/]")
                failures += 1

    if failures:
        console.print(f"[warning]{failures} of {len(chapter_list)} chapter(s) failed[/]")
        sys.exit(1)


@cli.command(name="save-translation")
@click.option("--novel-id", "-n", required=True, type=int, help="Novel ID")
@click.option("--chapter", "-c", required=True, help="Chapter number")
@click.option("--file", "-f", "path", required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Text file; its first line is the chapter title")
@click.pass_obj
def save_translation(settings, novel_id, chapter, path):
    """Save a manual translation from a text file."""
    text = path.read_text(encoding="utf-8")
    with open_library(settings) as actions:
        _unwrap(actions.save_manual_translation(novel_id, chapter, text))
    console.print(f"[success]Translation saved for chapter {chapter}[/]")


@cli.command()
@click.option("--novel-id", "-n", required=True, type=int, help="Novel ID")
@click.option("--chapters", "-c", default=None, help="Delete only these chapters, e.g. '3', '5-10' or '1,3'")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_obj
def delete(settings, novel_id, chapters, force):
    """Delete a novel, or selected chapters of it.

    \b
    Examples:
      novelshelf delete -n 3              # whole novel
      novelshelf delete -n 3 -c 5-10      # chapters 5 to 10
      novelshelf delete -n 3 -c 3 -f      # no confirmation
    """
    with open_library(settings) as actions:
        novel = _unwrap(actions.get_novel_by_id(novel_id))

        if chapters is not None:
            chapter_list = _parse_chapter_numbers(chapters)
            if not force and not click.confirm(
                f"Delete {len(chapter_list)} chapter(s) from '{novel.title}'? This cannot be undone",
                default=False,
            ):
                console.print("[warning]Cancelled[/]")
                return
            if len(chapter_list) == 1:
                _unwrap(actions.delete_chapter(novel_id, chapter_list[0]))
            else:
                _unwrap(actions.delete_chapters_batch(novel_id, chapter_list))
            console.print(f"[success]Chapters deleted from '{novel.title}'[/]")
            return

        if not force and not click.confirm(
            f"Delete '{novel.title}' with {len(novel.chapters)} chapters? This cannot be undone",
            default=False,
        ):
            console.print("[warning]Cancelled[/]")
            return
        _unwrap(actions.delete_novel(novel_id))

    console.print(f"[success]Novel '{novel.title}' (ID: {novel_id}) deleted[/]")


# ---------------------------------------------------------------------------
# Glossary commands
# ---------------------------------------------------------------------------

@cli.command()
@click.option("--novel-id", "-n", required=True, type=int, help="Novel ID")
@click.option("--query", "-q", default="", help="Filter terms (either side, case-insensitive)")
@click.pass_obj
def glossary(settings, novel_id, query):
    """Show a novel's translation glossary."""
    with open_library(settings) as actions:
        novel = _unwrap(actions.get_novel_by_id(novel_id))

    entries = search_glossary(novel.glossary, query)
    console.print(
        f"[bold]{novel.title}[/] glossary  [muted]({len(entries)} of {len(novel.glossary)} terms)[/]"
    )
    if not entries:
        console.print("[warning]No matching terms[/]")
        return
    console.print(glossary_table(entries))


@cli.command(name="set-term")
@click.option("--novel-id", "-n", required=True, type=int, help="Novel ID")
@click.argument("source_term")
@click.argument("target_term")
@click.pass_obj
def set_term(settings, novel_id, source_term, target_term):
    """Set the translation of a glossary term."""
    with open_library(settings) as actions:
        _unwrap(actions.update_glossary_term(novel_id, source_term, target_term))
    console.print(f"[success]{source_term} → {target_term}[/]")


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()

"""Unified Rich theme and reusable UI helper functions for the CLI."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.theme import Theme

LIBRARY_THEME = Theme({
    "app.title": "bold",
    "success": "green",
    "warning": "yellow",
    "error": "red",
    "info": "blue",
    "muted": "dim",
    "accent": "cyan",
    "stat.label": "dim",
    "stat.value": "bold",
    "chapter.num": "blue",
    "term.source": "bold cyan",
})


def get_console() -> Console:
    """Return a Console instance with the library theme applied."""
    return Console(theme=LIBRARY_THEME)


def app_header(title: str = "novelshelf") -> Rule:
    """Return a Rule element for the application header banner."""
    return Rule(title=f"[bold]{title}[/]", style="dim")


def success_panel(title: str, body: str) -> Panel:
    """Return a green-bordered Panel for success results."""
    return Panel(body, title=f"[success]{title}[/]", box=box.ROUNDED, border_style="green", padding=(0, 2))


def novel_summary_panel(novel) -> Panel:
    """Return a Panel with a novel's metadata and translation progress.

    Args:
        novel: Novel with .title, .author, .id, .chapters, .glossary attributes.
    """
    source = novel.source_url or "[muted]none (sync disabled)[/]"
    body = (
        f"  [stat.label]Author:[/] {novel.author or '-'}  "
        f"[muted]|[/]  [stat.label]Chapters:[/] [stat.value]{len(novel.chapters)}[/]  "
        f"[muted]|[/]  [stat.label]Translated:[/] [stat.value]{novel.translated_count}[/] "
        f"[muted]({novel.translation_progress:.0f}%)[/]  "
        f"[muted]|[/]  [stat.label]Glossary:[/] [stat.value]{len(novel.glossary)}[/] terms\n"
        f"  [stat.label]Source:[/] {source}"
    )
    return Panel(
        body,
        title=f"[bold]{novel.title}[/] [muted](ID: {novel.id})[/]",
        box=box.ROUNDED,
        border_style="dim",
        padding=(0, 2),
    )


def chapter_table(chapters: list) -> Table:
    """Build a table of chapters with their translation state."""
    table = Table(title="Chapters", box=box.ROUNDED, border_style="dim")
    table.add_column("#", style="chapter.num", justify="right")
    table.add_column("Title")
    table.add_column("Fetched", justify="center")
    table.add_column("Translated", justify="center")

    for ch in chapters:
        table.add_row(
            ch.chapter_number,
            ch.display_title or "-",
            "[success]yes[/]" if ch.content else "[muted]-[/]",
            "[success]yes[/]" if ch.is_translated else "[muted]-[/]",
        )
    return table


def glossary_table(entries: list[tuple[str, str]], limit: int = 200) -> Table:
    """Build a two-column table of (source, target) glossary entries."""
    table = Table(box=box.ROUNDED, border_style="dim", show_header=True, padding=(0, 1))
    table.add_column("Source", style="term.source")
    table.add_column("Translation")

    for source, target in entries[:limit]:
        table.add_row(source, target)

    if len(entries) > limit:
        table.add_row(f"[muted]+{len(entries) - limit} more[/]", "")

    return table

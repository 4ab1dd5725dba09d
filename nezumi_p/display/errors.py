"""Startup error panel."""

from rich.console import Group
from rich.panel import Panel
from rich.text import Text


def build_error_panel(error: str, stage: str, hint: str | None = None) -> Panel:
    """
    Show why startup stopped.

    ``stage`` names the step that failed ("Config" or "Feed") and becomes the
    panel title; ``hint`` is an optional line suggesting what to check.
    """
    lines = [Text(error, style="bold red")]
    if hint:
        lines.append(Text(hint, style="dim"))
    return Panel(
        Group(*lines),
        title=Text(f"{stage} error", style="bold red"),
        title_align="left",
        border_style="red",
    )

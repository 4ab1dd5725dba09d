"""Title bar."""

from rich.rule import Rule

from ..config import APP_NAME, VERSION


def build_title_bar(version: str = VERSION) -> Rule:
    """One-line title bar with the app name and version."""
    return Rule(
        f"[bold italic red]{APP_NAME} {version}[/]",
        align="left",
        style="white",
    )

"""Configuration status display for CLI"""

from rich.table import Table

import settings

REQUIRED_SETTINGS = ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET", "GOOGLE_REDIRECT_URI")


def missing_settings() -> list[str]:
    """Names of required OAuth settings that are unset"""
    return [name for name in REQUIRED_SETTINGS if not getattr(settings, name)]


def show_config_status(console) -> bool:
    """
    Display the effective configuration

    Args:
        console: Rich console for output

    Returns:
        True if every required setting is present
    """
    missing = missing_settings()

    table = Table(title="Inbox Brief Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for name in REQUIRED_SETTINGS:
        if name in missing:
            table.add_row(name, "[red]missing[/red]")
        elif name == "GOOGLE_CLIENT_SECRET":
            table.add_row(name, "[green]set[/green]")
        else:
            table.add_row(name, str(getattr(settings, name)))

    table.add_row("Bind", f"{settings.BIND_ADDRESS}:{settings.PORT}")
    table.add_row("Gmail API", settings.GMAIL_API_BASE)
    table.add_row("Inbox page size", str(settings.GMAIL_LIST_MAX_RESULTS))
    table.add_row("Secure cookies", "Yes" if settings.COOKIE_SECURE else "No")

    console.print(table)
    return not missing

"""
Terminal rendering for users, profiles and public views (rich)
"""

from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.box import ROUNDED
from rich.markup import escape

from personalbook_cli.sections import LIST_SECTION_NAMES, SECTION_SCHEMAS
from personalbook_cli.session import ClientSession


def _cell(value: Any) -> str:
    if value is None:
        return ""
    text = str(value)
    # Data-URL images are unreadable in a terminal
    if text.startswith("data:"):
        return "(embedded image)"
    return escape(text)


class Renderer:
    """Renders API payloads to a rich console"""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗ {escape(message)}[/red]")

    def session(self, session: ClientSession) -> None:
        lines = [
            f"[bold]Username:[/bold] {_cell(session.username)}",
            f"[bold]Role:[/bold] {_cell(session.role)}",
        ]
        if session.user_id:
            lines.append(f"[bold]User ID:[/bold] {_cell(session.user_id)}")
        lines.append(f"[dim]Server: {_cell(session.api_base_url)}[/dim]")
        self.console.print(Panel("\n".join(lines), title="Logged in", box=ROUNDED))

    def users(self, users: List[Dict[str, Any]]) -> None:
        if not users:
            self.console.print("[dim]No users registered yet.[/dim]")
            return

        table = Table(title="Users", box=ROUNDED)
        table.add_column("Username", style="bold")
        table.add_column("Email")
        table.add_column("Secret ID", style="cyan")
        table.add_column("Registered", style="dim")
        for user in users:
            table.add_row(
                _cell(user.get("username")),
                _cell(user.get("email")),
                _cell(user.get("secretId")),
                _cell(user.get("registeredAt")),
            )
        self.console.print(table)

    def account(self, account: Dict[str, Any]) -> None:
        self.console.print(Panel(
            f"[bold]{_cell(account.get('username'))}[/bold] <{_cell(account.get('email'))}>\n"
            f"Secret ID: [cyan]{_cell(account.get('secretId'))}[/cyan]\n"
            f"[dim]Registered {_cell(account.get('registeredAt'))}[/dim]",
            title="User registered",
            box=ROUNDED,
        ))

    def about(self, about: Dict[str, Any], title: str = "About") -> None:
        self.console.print(Panel(
            f"[bold]{_cell(about.get('name'))}[/bold]\n\n"
            f"{_cell(about.get('bio'))}\n\n"
            f"[dim]{_cell(about.get('image'))}[/dim]",
            title=title,
            box=ROUNDED,
        ))

    def section(self, section: str, items: List[Dict[str, Any]]) -> None:
        schema = SECTION_SCHEMAS[section]
        if not items:
            self.console.print(f"[dim]{schema.label}: nothing yet[/dim]")
            return

        table = Table(title=schema.label, box=ROUNDED)
        table.add_column("#", style="cyan", justify="right")
        for field_name in schema.fields:
            table.add_column(field_name.capitalize())
        for item in items:
            table.add_row(
                _cell(item.get("id")),
                *(_cell(item.get(field_name)) for field_name in schema.fields),
            )
        self.console.print(table)

    def profile(self, profile: Dict[str, Any], title: Optional[str] = None) -> None:
        """Full profile document, one block per section"""
        about = profile.get("about") or {}
        self.about(about, title=title or _cell(about.get("name")) or "Profile")
        for section in LIST_SECTION_NAMES:
            self.section(section, profile.get(section) or [])

    def public_profile(self, public: Dict[str, Any]) -> None:
        self.profile(public.get("profile") or {}, title=f"{_cell(public.get('username'))} (public)")

    def share_link(self, link: Dict[str, Any]) -> None:
        self.console.print(f"Public link: [link={link['url']}]{link['url']}[/link]")
        self.console.print(f"[dim]Key: {link['publicLinkKey']}[/dim]")

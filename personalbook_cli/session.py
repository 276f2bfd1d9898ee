"""
Client session lifecycle

A ClientSession is created by login, hydrated from disk on startup,
passed explicitly to every command, and cleared on logout.

Stored in ~/.personalbook/session.json (mode 0600).
"""

import os
import json
from pathlib import Path
from dataclasses import dataclass, asdict
from typing import Optional, Dict

from rich.console import Console


@dataclass
class ClientSession:
    """Logged-in identity as returned by /auth/login"""
    token: str
    role: str
    username: str
    # Secret id for users; None for the master
    user_id: Optional[str] = None
    api_base_url: str = ""

    @property
    def is_master(self) -> bool:
        return self.role == "master"

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class SessionStore:
    """Persists one ClientSession as JSON"""

    def __init__(self, path: Path, console: Optional[Console] = None):
        self.path = Path(path)
        self.console = console or Console(stderr=True)

    def hydrate(self) -> Optional[ClientSession]:
        """Load the saved session, or None when logged out"""
        if not self.path.exists():
            return None
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
            return ClientSession(**data)
        except (json.JSONDecodeError, TypeError) as e:
            self.console.print(f"[yellow]Warning: Ignoring unreadable session file: {e}[/yellow]")
            return None

    def save(self, session: ClientSession) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(asdict(session), f, indent=2)
        # Secure the file (no-op where chmod is unsupported)
        try:
            os.chmod(self.path, 0o600)
        except OSError:
            pass

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

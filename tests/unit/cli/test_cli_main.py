"""
Unit Tests for CLI commands (argparse entry point against a mock server)
"""
import json

import httpx
import pytest

from personalbook_cli import main as cli_main
from personalbook_cli.api_client import PersonalBookClient
from personalbook_cli.session import ClientSession, SessionStore


class FakeServer:
    """In-memory stand-in for the API, served through httpx.MockTransport"""

    def __init__(self):
        self.requests = []
        self.profile = {
            "userId": "482913",
            "publicLinkKey": "key123",
            "about": {"name": "Ada", "bio": "Bio goes here...", "image": "img"},
            "education": [], "projects": [], "learnings": [],
            "interests": [{"id": 1, "text": "Chess"}],
            "wishlist": [], "tours": [], "bestPics": [],
        }

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.method, request.url.path, body))
        path = request.url.path

        if path == "/api/auth/login":
            if body["type"] == "master":
                return httpx.Response(200, json={"token": "mtok", "role": "master", "username": "Master Admin"})
            if body.get("secretId") != "482913":
                return httpx.Response(401, json={"message": "Invalid Email or User ID", "code": "INVALID_CREDENTIALS"})
            return httpx.Response(200, json={"token": "utok", "role": "user", "username": "Ada", "id": "482913"})
        if path == "/api/profile/482913" and request.method == "GET":
            return httpx.Response(200, json=self.profile)
        if path == "/api/profile/482913" and request.method == "PUT":
            self.profile = {**body, "userId": "482913", "publicLinkKey": "key123"}
            return httpx.Response(200, json=self.profile)
        if path == "/api/users/register":
            return httpx.Response(201, json={
                "id": "uuid", "username": body["username"], "email": body["email"],
                "secretId": "482913", "role": "user", "registeredAt": "now",
            })
        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture
def server(monkeypatch, tmp_path) -> FakeServer:
    fake = FakeServer()
    monkeypatch.setenv("PERSONALBOOK_CONFIG_DIR", str(tmp_path))
    monkeypatch.setattr(
        cli_main,
        "PersonalBookClient",
        lambda base_url, token=None, timeout=30.0: PersonalBookClient(
            base_url, token=token, timeout=timeout, transport=httpx.MockTransport(fake)
        ),
    )
    return fake


@pytest.fixture
def store(tmp_path) -> SessionStore:
    return SessionStore(tmp_path / "session.json")


def login_as_user(store: SessionStore) -> None:
    store.save(ClientSession(token="utok", role="user", username="Ada", user_id="482913",
                             api_base_url="http://books.test/api"))


def test_user_login_saves_session(server, store):
    code = cli_main.main(["login", "--email", "ada@example.com", "--secret-id", "482913"])

    assert code == 0
    session = store.hydrate()
    assert session.role == "user"
    assert session.user_id == "482913"


def test_failed_login_saves_nothing(server, store):
    code = cli_main.main(["login", "--email", "ada@example.com", "--secret-id", "000000"])

    assert code == 1
    assert store.hydrate() is None


def test_logout_clears_session(server, store):
    login_as_user(store)

    assert cli_main.main(["logout"]) == 0
    assert store.hydrate() is None


def test_commands_require_login(server):
    assert cli_main.main(["profile", "show"]) == 1
    assert server.requests == []


def test_profile_add_fetches_then_replaces(server, store):
    login_as_user(store)

    code = cli_main.main(["profile", "add", "interests", "text=Poetry"])

    assert code == 0
    assert [(m, p) for m, p, _ in server.requests] == [
        ("GET", "/api/profile/482913"),
        ("PUT", "/api/profile/482913"),
    ]
    assert server.profile["interests"] == [{"id": 1, "text": "Chess"}, {"id": 2, "text": "Poetry"}]
    assert server.profile["about"]["name"] == "Ada"


def test_profile_about_updates_bio(server, store):
    login_as_user(store)

    assert cli_main.main(["profile", "about", "bio=Analyst"]) == 0
    assert server.profile["about"]["bio"] == "Analyst"


def test_profile_remove_unknown_item(server, store):
    login_as_user(store)

    assert cli_main.main(["profile", "remove", "interests", "9"]) == 1
    assert all(method != "PUT" for method, _, _ in server.requests)


def test_master_needs_explicit_user(server, store):
    store.save(ClientSession(token="mtok", role="master", username="Master Admin",
                             api_base_url="http://books.test/api"))

    assert cli_main.main(["profile", "show"]) == 1
    assert cli_main.main(["profile", "show", "--user", "482913"]) == 0


def test_register_user(server, store):
    store.save(ClientSession(token="mtok", role="master", username="Master Admin",
                             api_base_url="http://books.test/api"))

    assert cli_main.main(["users", "register", "--username", "Ada", "--email", "ada@example.com"]) == 0
    assert server.requests[-1][2] == {"username": "Ada", "email": "ada@example.com"}


def test_no_command_prints_help(server):
    assert cli_main.main([]) == 1

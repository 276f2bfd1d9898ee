"""
Unit Tests for client session persistence and CLI config
"""
import os
import stat
import sys

import pytest

from personalbook_cli.config import CLIConfig
from personalbook_cli.session import ClientSession, SessionStore


@pytest.fixture
def store(tmp_path) -> SessionStore:
    return SessionStore(tmp_path / "pb" / "session.json")


def make_session(**overrides) -> ClientSession:
    data = {
        "token": "tok",
        "role": "user",
        "username": "Ada",
        "user_id": "482913",
        "api_base_url": "http://localhost:5000/api",
    }
    data.update(overrides)
    return ClientSession(**data)


class TestSessionStore:

    def test_hydrate_without_file(self, store):
        assert store.hydrate() is None

    def test_save_then_hydrate(self, store):
        store.save(make_session())

        assert store.hydrate() == make_session()

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_file_is_private(self, store):
        store.save(make_session())

        assert stat.S_IMODE(os.stat(store.path).st_mode) == 0o600

    def test_clear(self, store):
        store.save(make_session())
        store.clear()

        assert store.hydrate() is None
        store.clear()

    def test_corrupt_file_ignored(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json")

        assert store.hydrate() is None


def test_session_helpers():
    master = make_session(role="master", user_id=None)

    assert master.is_master
    assert master.auth_headers() == {"Authorization": "Bearer tok"}
    assert not make_session().is_master


class TestCLIConfig:

    def test_session_file_under_config_dir(self, tmp_path):
        config = CLIConfig(config_dir=str(tmp_path))

        assert config.session_file == str(tmp_path / "session.json")

    def test_env_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PERSONALBOOK_CONFIG_DIR", str(tmp_path))
        monkeypatch.setenv("PERSONALBOOK_API_URL", "http://books.example.com/api")
        monkeypatch.setenv("PERSONALBOOK_TIMEOUT", "5")

        config = CLIConfig.load_default()

        assert config.api_base_url == "http://books.example.com/api"
        assert config.timeout == 5.0

    def test_file_then_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PERSONALBOOK_CONFIG_DIR", str(tmp_path))
        monkeypatch.delenv("PERSONALBOOK_API_URL", raising=False)
        CLIConfig(config_dir=str(tmp_path), api_base_url="http://from-file/api").save_to_file()

        assert CLIConfig.load_default().api_base_url == "http://from-file/api"

"""Tests for client settings."""

from pathlib import Path

from client.config import ClientSettings


def test_defaults(monkeypatch):
    monkeypatch.delenv("ECOCHALLENGE_API_BASE_URL", raising=False)
    settings = ClientSettings(_env_file=None)
    assert settings.api_base_url == "http://localhost:8000"
    assert settings.request_timeout == 10.0


def test_env_prefix(monkeypatch, tmp_path):
    monkeypatch.setenv("ECOCHALLENGE_API_BASE_URL", "https://api.example.org")
    monkeypatch.setenv("ECOCHALLENGE_SESSION_FILE", str(tmp_path / "s.json"))
    settings = ClientSettings(_env_file=None)
    assert settings.api_base_url == "https://api.example.org"
    assert settings.session_file == Path(tmp_path / "s.json")

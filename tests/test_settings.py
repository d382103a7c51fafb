"""Tests for environment-driven settings."""

from story_weaver.core.settings import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("OLLAMA_MODEL", raising=False)
    s = Settings(_env_file=None)
    assert s.ollama_model == "gemma3:4b"
    assert s.ollama_max_attempts == 1
    assert s.default_theme == "space"
    assert s.default_arc_type == "hero-journey"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("OLLAMA_MODEL", "llama3.2")
    monkeypatch.setenv("HISTORY_SNIPPETS", "4")
    monkeypatch.setenv("OLLAMA_HOST", "http://gpu-box:11434")
    s = Settings(_env_file=None)
    assert s.ollama_model == "llama3.2"
    assert s.history_snippets == 4
    assert str(s.ollama_host).startswith("http://gpu-box:11434")

"""Shared fixtures for story_weaver tests."""

import socket
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from story_weaver.core.models import ContinueResult, SeedResult
from story_weaver.services.story_controller import StoryController


class NetworkBlockedError(Exception):
    """Raised when a test attempts to make a network connection."""


def _block_socket_connect(*args, **kwargs):
    raise NetworkBlockedError("Network access is blocked in unit tests; use a fake backend.")


@pytest.fixture(autouse=True)
def block_network():
    """Keep every test away from a live Ollama server."""
    with patch.object(socket.socket, "connect", _block_socket_connect):
        with patch.object(socket, "create_connection", _block_socket_connect):
            yield


class FakeBackend:
    """
    Deterministic StoryBackend. Queue results (or exceptions) for each call;
    when the queue is empty a default three-choice continuation is returned.
    """

    def __init__(self, seed=None):
        self.seed_result = seed if seed is not None else SeedResult(
            story_seed="You wake aboard a drifting station.",
            initial_choices=["Check the airlock", "Call for help", "Search the lab"],
        )
        self.continuations = []
        self.seed_calls = []
        self.continue_calls = []

    def seed(self, request):
        self.seed_calls.append(request)
        if isinstance(self.seed_result, Exception):
            raise self.seed_result
        return self.seed_result

    def continue_story(self, request):
        self.continue_calls.append(request)
        if self.continuations:
            nxt = self.continuations.pop(0)
        else:
            nxt = ContinueResult(
                next_snippet=f"Scene {len(self.continue_calls)}.",
                next_choices=["Left", "Right", "Wait"],
            )
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


@pytest.fixture()
def backend():
    return FakeBackend()


@pytest.fixture()
def controller(backend):
    return StoryController(backend, theme="space", arc_type="hero-journey")


@pytest.fixture()
def started(controller):
    """Controller with a seeded story."""
    controller.start_story()
    return controller


class FakeOllama:
    """Stands in for OllamaClient; returns canned raw model text."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []

    def generate(self, prompt, max_tokens=900, temperature=0.8, json_format=True):
        self.prompts.append(prompt)
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return SimpleNamespace(response=nxt)


@pytest.fixture()
def fake_ollama():
    return FakeOllama

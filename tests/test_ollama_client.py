"""Tests for the Ollama wrapper with the HTTP client stubbed out."""

from unittest.mock import MagicMock

from ollama import ResponseError

from story_weaver.services.ollama_client import OllamaClient


def _client_with(stub):
    client = OllamaClient(host="http://ollama.test:11434", model="tiny")
    client._client = stub
    return client


def test_generate_requests_json_with_options():
    stub = MagicMock()
    stub.generate.return_value = {"response": "{}"}
    client = _client_with(stub)

    assert client.generate("hello", max_tokens=50, temperature=0.3) == {"response": "{}"}
    stub.generate.assert_called_once_with(
        model="tiny", prompt="hello", options={"temperature": 0.3, "num_predict": 50}, format="json",
    )


def test_generate_plain_text_format():
    stub = MagicMock()
    _client_with(stub).generate("hello", json_format=False)
    assert stub.generate.call_args.kwargs["format"] == ""


def test_missing_model_is_pulled_then_retried():
    stub = MagicMock()
    stub.generate.side_effect = [ResponseError("model not found", 404), {"response": "ok"}]
    client = _client_with(stub)

    assert client.generate("hello") == {"response": "ok"}
    stub.pull.assert_called_once_with("tiny")
    assert stub.generate.call_count == 2


def test_is_available_reports_connection_failure():
    stub = MagicMock()
    stub.list.side_effect = ConnectionError("refused")
    assert _client_with(stub).is_available() is False


def test_is_available_when_server_answers():
    stub = MagicMock()
    stub.list.return_value = {"models": []}
    assert _client_with(stub).is_available() is True

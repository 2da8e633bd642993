import base64
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from openai import OpenAIError

from presentai import openai_helpers


def _chunk(content, choices=True):
    if not choices:
        return SimpleNamespace(choices=[])
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])


def test_iter_stream_text_skips_empty_deltas():
    stream = [_chunk("a"), _chunk(None), _chunk(""), _chunk(None, choices=False), _chunk("b")]

    assert list(openai_helpers.iter_stream_text(stream)) == ["a", "b"]


def test_get_openai_client_requires_key(app):
    app.config["OPENAI_API_KEY"] = None
    with app.app_context():
        with pytest.raises(ValueError):
            openai_helpers.get_openai_client()


def test_get_openai_client_disables_retries(app):
    with app.app_context(), patch("presentai.openai_helpers.OpenAI") as openai_cls:
        openai_helpers.get_openai_client()

    assert openai_cls.call_args.kwargs["api_key"] == "sk-test"
    assert openai_cls.call_args.kwargs["max_retries"] == 0


def test_stream_presentation_text_wraps_api_errors(app):
    client = MagicMock()
    client.chat.completions.create.side_effect = OpenAIError("bad gateway")

    with app.app_context(), patch("presentai.openai_helpers.get_openai_client", return_value=client):
        with pytest.raises(ConnectionError):
            openai_helpers.stream_presentation_text("prompt")


def test_generate_openai_image_returns_url(app):
    client = MagicMock()
    client.images.generate.return_value = SimpleNamespace(data=[SimpleNamespace(url="https://img/1.png", b64_json=None)])

    with app.app_context(), patch("presentai.openai_helpers.get_openai_client", return_value=client):
        assert openai_helpers.generate_openai_image("a fox") == "https://img/1.png"

    client.images.generate.assert_called_once_with(model="dall-e-3", prompt="a fox", size="1024x1024", n=1)


def test_generate_openai_image_decodes_base64_payloads(app):
    raw = b"\x89PNGdata"
    client = MagicMock()
    client.images.generate.return_value = SimpleNamespace(
        data=[SimpleNamespace(url=None, b64_json=base64.b64encode(raw).decode())])

    with app.app_context(), patch("presentai.openai_helpers.get_openai_client", return_value=client):
        assert openai_helpers.generate_openai_image("a fox", model="gpt-image-1") == raw

    assert client.images.generate.call_args.kwargs["model"] == "gpt-image-1"


def test_generate_openai_image_without_data(app):
    client = MagicMock()
    client.images.generate.return_value = SimpleNamespace(data=[])

    with app.app_context(), patch("presentai.openai_helpers.get_openai_client", return_value=client):
        assert openai_helpers.generate_openai_image("a fox") is None


def test_log_prompt_to_file_appends_entries(app, tmp_path):
    log_file = tmp_path / "logs" / "prompts.log"
    app.config["PROMPT_LOG_FILE"] = str(log_file)

    with app.app_context():
        openai_helpers.log_prompt_to_file("Image Generation Request", {"Model": "dall-e-3", "Prompt": "a fox"})
        openai_helpers.log_prompt_to_file("Note", "plain text entry")

    text = log_file.read_text(encoding="utf-8")
    assert "--- Image Generation Request Log Entry [" in text
    assert "Prompt:\na fox" in text
    assert "plain text entry" in text

# tests/test_llm_agent.py
"""
Tests for the provider clients. The SDK client classes are replaced with mocks.
"""

import base64
import pytest
from unittest.mock import MagicMock, patch

from capture_api.config import settings
from capture_api.errors import LLMError
from capture_api.llm_agent import encode_image, llm_vision

IMAGE = b"\x89PNG\r\n\x1a\nfake"


@pytest.fixture
def gemini(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "gemini")
    monkeypatch.setattr(settings, "google_api_key", "test-google-key")
    monkeypatch.setattr(settings, "gemini_model", "gemini-2.0-flash-001")


@pytest.fixture
def openai(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "openai")
    monkeypatch.setattr(settings, "openai_api_key", "test-openai-key")
    monkeypatch.setattr(settings, "openai_model", "gpt-4o-mini")


def test_encode_image():
    assert encode_image(IMAGE) == base64.b64encode(IMAGE).decode("utf-8")
    assert base64.b64decode(encode_image(IMAGE)) == IMAGE


class TestGemini:
    @patch("capture_api.llm_agent.genai.Client")
    def test_single_call_with_prompt_and_image(self, mock_client_cls, gemini):
        mock_client = mock_client_cls.return_value
        mock_client.models.generate_content.return_value = MagicMock(text='["BK123"]')

        reply = llm_vision("Which hotel?", IMAGE, "image/png")

        assert reply == '["BK123"]'
        mock_client_cls.assert_called_once_with(api_key="test-google-key")
        mock_client.models.generate_content.assert_called_once()

        kwargs = mock_client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.0-flash-001"
        (content,) = kwargs["contents"]
        assert content.role == "user"
        text_part, image_part = content.parts
        assert text_part.text == "Which hotel?"
        assert image_part.inline_data.data == IMAGE
        assert image_part.inline_data.mime_type == "image/png"

    @patch("capture_api.llm_agent.genai.Client")
    def test_missing_text_becomes_empty_string(self, mock_client_cls, gemini):
        mock_client_cls.return_value.models.generate_content.return_value = MagicMock(text=None)

        assert llm_vision("Which hotel?", IMAGE, "image/png") == ""

    @patch("capture_api.llm_agent.genai.Client")
    def test_sdk_errors_propagate(self, mock_client_cls, gemini):
        mock_client_cls.return_value.models.generate_content.side_effect = RuntimeError("API key not valid")

        with pytest.raises(RuntimeError, match="API key not valid"):
            llm_vision("Which hotel?", IMAGE, "image/png")


class TestOpenAI:
    @patch("capture_api.llm_agent.OpenAI")
    def test_image_sent_as_data_uri(self, mock_client_cls, openai):
        mock_client = mock_client_cls.return_value
        message = MagicMock(content="BK123\nGrand Hotel")
        mock_client.chat.completions.create.return_value = MagicMock(choices=[MagicMock(message=message)])

        reply = llm_vision("Which hotel?", IMAGE, "image/jpeg")

        assert reply == "BK123\nGrand Hotel"
        mock_client_cls.assert_called_once_with(api_key="test-openai-key")

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        (message_in,) = kwargs["messages"]
        text_part, image_part = message_in["content"]
        assert text_part == {"type": "text", "text": "Which hotel?"}
        assert image_part["image_url"]["url"] == f"data:image/jpeg;base64,{encode_image(IMAGE)}"


def test_unknown_provider(monkeypatch):
    monkeypatch.setattr(settings, "llm_provider", "claude")

    with pytest.raises(LLMError, match="Unknown LLM provider 'claude'"):
        llm_vision("Which hotel?", IMAGE, "image/png")

import io
from types import SimpleNamespace
from unittest.mock import MagicMock

import openai
import pytest
from PIL import Image

from config.settings import DEFAULT_VISION_PROMPT, VisionSettings
from core.indexing.captions import VisionCaptioner, detect_mime_type


def _png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color="red").save(buffer, format="PNG")
    return buffer.getvalue()


def _chat_response(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def client():
    return MagicMock(name="openai_client")


def test_detect_mime_type():
    assert detect_mime_type(_png_bytes()) == "image/png"
    assert detect_mime_type(b"not an image") == "image/jpeg"


def test_caption_success_sends_prompt_and_image(client):
    client.chat.completions.create.return_value = _chat_response("  A dog running on a beach.  ")
    captioner = VisionCaptioner(VisionSettings(), client=client)

    outcome = captioner.caption(_png_bytes())

    assert outcome.ok
    assert outcome.value == "A dog running on a beach."
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["max_tokens"] == 300
    content = kwargs["messages"][0]["content"]
    assert content[0] == {"type": "text", "text": DEFAULT_VISION_PROMPT}
    assert content[1]["image_url"]["url"].startswith("data:image/png;base64,")
    assert content[1]["image_url"]["detail"] == "high"


def test_prompt_asks_for_searchable_details():
    for topic in ["people", "location", "activities", "colors", "clothing", "objects", "text"]:
        assert topic in DEFAULT_VISION_PROMPT


def test_service_error_becomes_failure(client):
    client.chat.completions.create.side_effect = openai.OpenAIError("rate limited")
    captioner = VisionCaptioner(client=client)

    outcome = captioner.caption(b"bytes")

    assert not outcome.ok
    assert "rate limited" in outcome.reason
    assert client.chat.completions.create.call_count == 1


@pytest.mark.parametrize("response", [_chat_response(None), _chat_response("   "), SimpleNamespace(choices=[])])
def test_empty_or_malformed_response_becomes_failure(client, response):
    client.chat.completions.create.return_value = response

    outcome = VisionCaptioner(client=client).caption(b"bytes")

    assert not outcome.ok

import base64
import logging
from google import genai
from google.genai import types
from openai import OpenAI

from .config import settings
from .errors import LLMError

logger = logging.getLogger(__name__)


def encode_image(image: bytes) -> str:
    """Standard base64 text of the raw image bytes."""
    return base64.b64encode(image).decode("utf-8")


def _gemini_vision(prompt: str, image: bytes, mime_type: str) -> str:
    # A fresh client per call, so a missing key fails the request instead of the import
    gemini_client = genai.Client(api_key=settings.google_api_key)

    contents = [
        types.Content(
            role="user",
            parts=[
                types.Part.from_text(text=prompt),
                types.Part.from_bytes(data=image, mime_type=mime_type),
            ],
        )
    ]
    response = gemini_client.models.generate_content(
        model=settings.gemini_model,
        contents=contents,
    )
    return response.text or ""


def _openai_vision(prompt: str, image: bytes, mime_type: str) -> str:
    openai_client = OpenAI(api_key=settings.openai_api_key)

    response = openai_client.chat.completions.create(
        model=settings.openai_model,
        messages=[
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {
                        "type": "image_url",
                        "image_url": {
                            "url": f"data:{mime_type};base64,{encode_image(image)}"
                        }
                    }
                ]
            }
        ]
    )
    return response.choices[0].message.content or ""


def llm_vision(prompt: str, image: bytes, mime_type: str) -> str:
    """
    Sends the prompt and the image to the configured provider in a single call
    and returns the reply text. SDK errors are not caught here.
    """
    provider = settings.llm_provider
    logger.info(f"Calling {provider} vision model ({len(image)} image bytes, {mime_type})")

    if provider == "gemini":
        return _gemini_vision(prompt, image, mime_type)
    elif provider == "openai":
        return _openai_vision(prompt, image, mime_type)

    raise LLMError(f"Unknown LLM provider '{provider}'")

"""Tests for the Gemini client wrapper."""

import time
from unittest.mock import MagicMock

import pytest
from google.genai import types

from conftest import PNG_BYTES, image_response, text_response
from room_designer.config import GeminiConfig
from room_designer.exceptions import MissingCredentialsError
from room_designer.services.gemini_client import GeminiClient, find_inline_image


def test_client_requires_api_key():
    client = GeminiClient(GeminiConfig(api_key=""))
    with pytest.raises(MissingCredentialsError):
        client.client


@pytest.mark.asyncio
async def test_generate_image_requests_image_modality():
    client = GeminiClient(GeminiConfig(api_key="key", image_model="img-model"))
    sdk = MagicMock()
    sdk.models.generate_content.return_value = image_response()
    client._client = sdk
    parts = [types.Part.from_text(text="nursery")]

    response = await client.generate_image(parts)

    assert find_inline_image(response).data == PNG_BYTES
    kwargs = sdk.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "img-model"
    assert kwargs["config"].response_modalities == ["IMAGE"]
    assert kwargs["contents"][0].parts == parts


@pytest.mark.asyncio
async def test_generate_text_has_no_modality_restriction():
    client = GeminiClient(GeminiConfig(api_key="key", text_model="text-model"))
    sdk = MagicMock()
    sdk.models.generate_content.return_value = text_response("a---SPLIT---b")
    client._client = sdk

    response = await client.generate_text([types.Part.from_text(text="advice")])

    assert response.text == "a---SPLIT---b"
    kwargs = sdk.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "text-model"
    assert kwargs["config"] is None


@pytest.mark.asyncio
async def test_timeout_is_reported():
    client = GeminiClient(GeminiConfig(api_key="key", timeout=1))
    sdk = MagicMock()
    sdk.models.generate_content.side_effect = lambda **kwargs: time.sleep(1.5)
    client._client = sdk

    with pytest.raises(TimeoutError, match="1 seconds"):
        await client.generate_text([types.Part.from_text(text="advice")])


def test_find_inline_image_skips_text_parts():
    response = types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(
                    role="model",
                    parts=[
                        types.Part.from_text(text="Here is your nursery"),
                        types.Part.from_bytes(data=PNG_BYTES, mime_type="image/png"),
                    ],
                )
            )
        ]
    )
    blob = find_inline_image(response)
    assert blob.mime_type == "image/png"


def test_find_inline_image_none_when_missing():
    assert find_inline_image(text_response("sorry")) is None
    assert find_inline_image(types.GenerateContentResponse()) is None
    assert find_inline_image(types.GenerateContentResponse(candidates=[types.Candidate()])) is None

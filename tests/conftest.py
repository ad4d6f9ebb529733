"""Shared fixtures: a fake Gemini client and canned responses."""

import asyncio

import pytest
from google.genai import types

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 16


def image_response(data: bytes = PNG_BYTES, mime_type: str = "image/png") -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(
                    role="model",
                    parts=[types.Part.from_bytes(data=data, mime_type=mime_type)],
                )
            )
        ]
    )


def text_response(text: str) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=[types.Part.from_text(text=text)])
            )
        ]
    )


class FakeGemini:
    """Stands in for GeminiClient and records the parts it was called with."""

    def __init__(
        self,
        image=None,
        text=None,
        image_error: Exception | None = None,
        text_error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ):
        self.image = image if image is not None else image_response()
        self.text = text if text is not None else text_response("Tip A\n---SPLIT---\nEssential B")
        self.image_error = image_error
        self.text_error = text_error
        self.gate = gate
        self.image_calls: list[list[types.Part]] = []
        self.text_calls: list[list[types.Part]] = []

    async def generate_image(self, parts):
        self.image_calls.append(parts)
        if self.gate is not None:
            await self.gate.wait()
        if self.image_error is not None:
            raise self.image_error
        return self.image

    async def generate_text(self, parts):
        self.text_calls.append(parts)
        if self.text_error is not None:
            raise self.text_error
        return self.text

    @property
    def calls(self) -> int:
        return len(self.image_calls) + len(self.text_calls)


async def wait_for_call(fake: FakeGemini) -> None:
    """Yield to the loop until the fake received its first request."""
    for _ in range(100):
        if fake.image_calls:
            return
        await asyncio.sleep(0)
    raise AssertionError("Gemini was never called")


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()

"""Google Gemini client for nursery image and advice generation."""

import asyncio
import logging
from typing import Any

from google import genai
from google.genai import types

from room_designer.config import GeminiConfig, get_config
from room_designer.exceptions import MissingCredentialsError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Client for Google Gemini API."""

    def __init__(self, config: GeminiConfig | None = None):
        """Initialize Gemini client.

        The underlying SDK client is created on first use so that a missing
        API key only fails the request that needs it.

        Args:
            config: Gemini configuration. If None, uses global config.
        """
        self.config = config or get_config().gemini
        self._client: genai.Client | None = None
        logger.info(
            f"Gemini Client initialized: image_model={self.config.image_model}, "
            f"text_model={self.config.text_model}"
        )

    @property
    def client(self) -> genai.Client:
        """SDK client, created lazily."""
        if self._client is None:
            if not self.config.api_key:
                raise MissingCredentialsError(
                    "Gemini API key is not configured. Set GEMINI_API_KEY."
                )
            self._client = genai.Client(api_key=self.config.api_key)
        return self._client

    async def generate_image(self, parts: list[types.Part]) -> types.GenerateContentResponse:
        """Request an image-only response.

        Args:
            parts: Ordered content parts (optional inline photo, then prompt)

        Returns:
            Raw Gemini response

        Raises:
            Exception: On API error
        """
        config = types.GenerateContentConfig(response_modalities=["IMAGE"])
        logger.info(f"Requesting image from {self.config.image_model} ({len(parts)} part(s))")
        return await self._generate(self.config.image_model, parts, config)

    async def generate_text(self, parts: list[types.Part]) -> types.GenerateContentResponse:
        """Request a plain text response.

        Args:
            parts: Ordered content parts (optional inline photo, then prompt)

        Returns:
            Raw Gemini response

        Raises:
            Exception: On API error
        """
        logger.info(f"Requesting text from {self.config.text_model} ({len(parts)} part(s))")
        return await self._generate(self.config.text_model, parts, None)

    async def _generate(
        self,
        model: str,
        parts: list[types.Part],
        config: types.GenerateContentConfig | None,
    ) -> types.GenerateContentResponse:
        contents = [types.Content(role="user", parts=parts)]
        client = self.client

        try:
            # SDK call is blocking, run it in executor
            loop = asyncio.get_running_loop()
            response = await asyncio.wait_for(
                loop.run_in_executor(
                    None, self._generate_sync, client, model, contents, config
                ),
                timeout=self.config.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Gemini request to {model} timed out after {self.config.timeout}s")
            raise TimeoutError(
                f"The design service did not answer within {self.config.timeout} seconds."
            ) from e
        except Exception as e:
            logger.error(f"Error calling Gemini model {model}: {e}")
            raise

        return response

    @staticmethod
    def _generate_sync(
        client: genai.Client,
        model: str,
        contents: list[types.Content],
        config: types.GenerateContentConfig | None,
    ) -> Any:
        """Generate content (synchronous)."""
        return client.models.generate_content(
            model=model,
            contents=contents,
            config=config,
        )


def find_inline_image(response: Any) -> types.Blob | None:
    """Return the first inline image blob of the first candidate, if any."""
    candidates = getattr(response, "candidates", None)
    if not candidates:
        return None

    content = candidates[0].content
    if content is None or content.parts is None:
        return None

    for part in content.parts:
        if part.inline_data and part.inline_data.data:
            return part.inline_data
        if part.text:
            logger.debug(f"Gemini text alongside image: {part.text}")
    return None


# Singleton instance
_gemini_client: GeminiClient | None = None


def get_gemini_client() -> GeminiClient:
    """Get Gemini client singleton instance."""
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient()
    return _gemini_client

"""Room designer: form state, two-step Gemini workflow and result state."""

import asyncio
import logging
from pathlib import Path
from typing import Any

from google.genai import types

from room_designer.exceptions import (
    AdviceFormatError,
    ImageGenerationError,
    SubmissionInProgressError,
)
from room_designer.models import (
    FormState,
    InputMode,
    ResultState,
    SubjectCategory,
    UploadedFile,
    VisualStyle,
)
from room_designer.services.gemini_client import GeminiClient, find_inline_image, get_gemini_client
from room_designer.utils.file_handler import detect_mime_type, read_file_bytes, to_data_uri
from room_designer.utils.prompt_builder import SPLIT_TOKEN, build_advice_prompt, build_image_prompt

logger = logging.getLogger(__name__)

NO_INPUT_MESSAGE = "Please upload a photo or describe the room."
IMAGE_FAILED_MESSAGE = "Could not generate the image. Please try again."
ADVICE_FORMAT_MESSAGE = "The advice came back in an unexpected format. Please try again."
GENERIC_ERROR_MESSAGE = "Something went wrong while generating ideas. Please try again."


def split_advice(text: str | None) -> tuple[str, str]:
    """Split the advice response into (decoration tips, baby essentials).

    Text before the first delimiter is the tips; everything after it is the
    essentials, with any further delimiters dropped.

    Raises:
        AdviceFormatError: If the text is empty or has no delimiter
    """
    if not text or SPLIT_TOKEN not in text:
        raise AdviceFormatError(ADVICE_FORMAT_MESSAGE)

    tips, _, rest = text.partition(SPLIT_TOKEN)
    essentials = "\n".join(chunk.strip() for chunk in rest.split(SPLIT_TOKEN) if chunk.strip())
    return tips.strip(), essentials.strip()


def error_message_for(error: BaseException) -> str:
    """Human-readable message for a failed submission."""
    message = getattr(error, "message", None) or str(error)
    return message or GENERIC_ERROR_MESSAGE


class RoomDesigner:
    """Single nursery design session.

    Holds what the user entered (FormState) and what came back (ResultState),
    and runs the image-then-advice workflow against Gemini.
    """

    def __init__(
        self,
        gemini_client: GeminiClient | None = None,
        form: FormState | None = None,
        session_id: Any = None,
    ):
        self._gemini = gemini_client
        self.form = form or FormState()
        self.result = ResultState()
        self.session_id = session_id
        self._lock = asyncio.Lock()
        self._task: asyncio.Task | None = None
        self._cancel_requested = False

    @property
    def gemini(self) -> GeminiClient:
        if self._gemini is None:
            self._gemini = get_gemini_client()
        return self._gemini

    @property
    def is_busy(self) -> bool:
        return self.result.is_loading or self._lock.locked()

    # Input manager

    def set_input_mode(self, mode: InputMode | str) -> None:
        self.form.input_mode = InputMode(mode)

    async def ingest_file(self, file: UploadedFile | Path) -> None:
        """Store an image and build its preview data URI.

        Args:
            file: Uploaded image, or path to a downloaded image file
        """
        loop = asyncio.get_running_loop()
        if isinstance(file, Path):
            data = await loop.run_in_executor(None, read_file_bytes, file)
            file = UploadedFile(data=data, mime_type=detect_mime_type(data), filename=file.name)

        self.form.selected_file = file
        self.form.preview_data_uri = await loop.run_in_executor(
            None, to_data_uri, file.data, file.mime_type
        )
        logger.info(
            f"[SESSION {self.session_id}] Photo ingested: {len(file.data)} bytes, {file.mime_type}"
        )

    def set_description_text(self, text: str) -> None:
        self.form.description_text = text

    def set_subject_category(self, value: SubjectCategory | str) -> None:
        self.form.subject_category = SubjectCategory(value)

    def set_visual_style(self, value: VisualStyle | str) -> None:
        self.form.visual_style = VisualStyle(value)

    # Submission workflow

    async def submit(self) -> ResultState:
        """Generate the nursery image and advice for the current form.

        Returns:
            Result state after the submission finished

        Raises:
            SubmissionInProgressError: If another submission is running
        """
        if self.is_busy:
            raise SubmissionInProgressError("A design is already being generated.")

        if not self.form.has_input:
            logger.info(f"[SESSION {self.session_id}] Submit without photo or description")
            self.result.error_message = NO_INPUT_MESSAGE
            return self.result

        async with self._lock:
            self._cancel_requested = False
            form = self.form.model_copy(deep=True)
            self._task = asyncio.create_task(self._run(form))
            try:
                await self._task
            except asyncio.CancelledError:
                if not self._cancel_requested:
                    raise
                logger.info(f"[SESSION {self.session_id}] Submission cancelled")
            finally:
                self._task = None

        return self.result

    def cancel(self) -> bool:
        """Cancel the in-flight submission.

        Returns:
            True if a running submission was cancelled
        """
        if self._task is None or self._task.done():
            return False
        self._cancel_requested = True
        self._task.cancel()
        return True

    def reset(self) -> None:
        """Clear results and entered room data, keeping category and style."""
        self.cancel()
        self.form.selected_file = None
        self.form.preview_data_uri = None
        self.form.description_text = ""
        self.result.clear()
        logger.info(f"[SESSION {self.session_id}] Form reset")

    async def _run(self, form: FormState) -> None:
        result = self.result
        result.clear()
        result.is_loading = True

        try:
            parts: list[types.Part] = []
            if form.selected_file is not None:
                parts.append(
                    types.Part.from_bytes(
                        data=form.selected_file.data,
                        mime_type=form.selected_file.mime_type,
                    )
                )

            # Step 1: image
            image_prompt = build_image_prompt(
                form.input_mode,
                form.subject_category,
                form.visual_style,
                form.description_text,
            )
            logger.info(
                f"[SESSION {self.session_id}] Step 1/2: generating image "
                f"(mode={form.input_mode.value}, category={form.subject_category.value}, "
                f"style={form.visual_style.value})"
            )
            image_response = await self.gemini.generate_image(
                [*parts, types.Part.from_text(text=image_prompt)]
            )
            image = find_inline_image(image_response)
            if image is None:
                raise ImageGenerationError(IMAGE_FAILED_MESSAGE)
            result.generated_image_data_uri = to_data_uri(
                image.data, image.mime_type or "image/png"
            )

            # Step 2: advice
            advice_prompt = build_advice_prompt(
                form.input_mode,
                form.subject_category,
                form.visual_style,
                form.description_text,
            )
            logger.info(f"[SESSION {self.session_id}] Step 2/2: generating advice")
            text_response = await self.gemini.generate_text(
                [*parts, types.Part.from_text(text=advice_prompt)]
            )
            tips, essentials = split_advice(text_response.text)
            result.decoration_tips = tips
            result.baby_essentials = essentials
            logger.info(f"[SESSION {self.session_id}] Design completed")

        except asyncio.CancelledError:
            result.clear()
            raise
        except Exception as e:
            logger.error(f"[SESSION {self.session_id}] Error during generation: {e}", exc_info=True)
            result.error_message = error_message_for(e)
        finally:
            result.is_loading = False

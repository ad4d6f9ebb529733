"""Form and result state of the room designer."""

from enum import Enum

from pydantic import BaseModel, Field


class InputMode(str, Enum):
    """How the room is captured."""

    PHOTO = "photo"
    DESCRIPTION = "description"


class SubjectCategory(str, Enum):
    """Who the nursery is for."""

    BOY = "boy"
    GIRL = "girl"
    NEUTRAL = "neutral"


class VisualStyle(str, Enum):
    """Decor aesthetic."""

    COLORFUL = "colorful"
    ELEGANT = "elegant"
    COZY = "cozy"


class UploadedFile(BaseModel):
    """Image picked by the user."""

    data: bytes
    mime_type: str = "image/jpeg"
    filename: str | None = None


class FormState(BaseModel):
    """Everything the user entered."""

    input_mode: InputMode = InputMode.PHOTO
    selected_file: UploadedFile | None = None
    preview_data_uri: str | None = None
    description_text: str = ""
    subject_category: SubjectCategory = SubjectCategory.BOY
    visual_style: VisualStyle = VisualStyle.COZY

    model_config = {"validate_assignment": True}

    @property
    def has_input(self) -> bool:
        """True when there is a file or a non-empty description to submit."""
        return self.selected_file is not None or bool(self.description_text)


class ResultState(BaseModel):
    """Outcome of the latest submission."""

    generated_image_data_uri: str | None = None
    decoration_tips: str | None = None
    baby_essentials: str | None = None
    error_message: str | None = None
    is_loading: bool = Field(False, description="Submission in flight")

    def clear(self) -> None:
        """Drop every result field and the loading flag."""
        self.generated_image_data_uri = None
        self.decoration_tips = None
        self.baby_essentials = None
        self.error_message = None
        self.is_loading = False

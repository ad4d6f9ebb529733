"""Input panel keyboards and result block delivery."""

import html
import logging

from aiogram.filters.callback_data import CallbackData
from aiogram.types import (
    BufferedInputFile,
    InlineKeyboardMarkup,
    InputMediaPhoto,
    Message,
)
from aiogram.utils.keyboard import InlineKeyboardBuilder

from room_designer.models import (
    FormState,
    InputMode,
    ResultState,
    SubjectCategory,
    VisualStyle,
)
from room_designer.renderer import Block, BlockKind
from room_designer.utils.file_handler import from_data_uri

logger = logging.getLogger(__name__)

GENERATE = "generate"
RESET = "reset"

MODE_LABELS = {
    InputMode.PHOTO: "📷 Upload photo",
    InputMode.DESCRIPTION: "✍️ Describe room",
}
CATEGORY_LABELS = {
    SubjectCategory.BOY: "Boy",
    SubjectCategory.GIRL: "Girl",
    SubjectCategory.NEUTRAL: "Neutral",
}
STYLE_LABELS = {
    VisualStyle.COLORFUL: "Colorful",
    VisualStyle.ELEGANT: "Elegant",
    VisualStyle.COZY: "Cozy",
}


class ModeChoice(CallbackData, prefix="mode"):
    value: InputMode


class CategoryChoice(CallbackData, prefix="category"):
    value: SubjectCategory


class StyleChoice(CallbackData, prefix="style"):
    value: VisualStyle


def _label(text: str, active: bool) -> str:
    return f"✅ {text}" if active else text


def build_form_keyboard(form: FormState, result: ResultState) -> InlineKeyboardMarkup:
    """Tabs, option rows and the action button for the current state."""
    builder = InlineKeyboardBuilder()

    for mode, text in MODE_LABELS.items():
        builder.button(
            text=_label(text, form.input_mode == mode),
            callback_data=ModeChoice(value=mode),
        )
    for category, text in CATEGORY_LABELS.items():
        builder.button(
            text=_label(text, form.subject_category == category),
            callback_data=CategoryChoice(value=category),
        )
    for style, text in STYLE_LABELS.items():
        builder.button(
            text=_label(text, form.visual_style == style),
            callback_data=StyleChoice(value=style),
        )

    if result.generated_image_data_uri and not result.is_loading:
        builder.button(text="🔄 Generate again", callback_data=RESET)
    elif result.is_loading:
        builder.button(text="⏳ Generating...", callback_data=GENERATE)
    else:
        builder.button(text="✨ Generate ideas", callback_data=GENERATE)

    builder.adjust(len(MODE_LABELS), len(CATEGORY_LABELS), len(STYLE_LABELS), 1)
    return builder.as_markup()


def build_form_text(form: FormState) -> str:
    """Caption of the input panel describing what was entered so far."""
    lines = ["<b>AI Nursery Designer</b>", ""]

    if form.input_mode == InputMode.PHOTO:
        if form.selected_file is not None:
            lines.append("📷 Photo received. You can send another one to replace it.")
        else:
            lines.append("📷 Send a photo of the room.")
    else:
        if form.description_text:
            lines.append(f"✍️ Description: <i>{html.escape(form.description_text)}</i>")
        else:
            lines.append(
                "✍️ Describe the room, e.g. <i>A 3m x 4m room with a large window on the "
                "north wall and a door in the southwest corner.</i>"
            )

    lines.append("")
    lines.append("Pick the options below and press <b>Generate ideas</b>.")
    return "\n".join(lines)


async def send_form(message: Message, form: FormState, result: ResultState) -> Message:
    """Send the input panel as a new message."""
    return await message.answer(
        build_form_text(form),
        reply_markup=build_form_keyboard(form, result),
        parse_mode="HTML",
    )


def _photo(data_uri: str, name: str) -> BufferedInputFile:
    data, mime_type = from_data_uri(data_uri)
    extension = mime_type.split("/")[-1] if "/" in mime_type else "png"
    return BufferedInputFile(data, filename=f"{name}.{extension}")


async def send_blocks(message: Message, blocks: list[Block]) -> list[Message]:
    """Deliver rendered result blocks as chat messages.

    Args:
        message: Message to answer in the same chat
        blocks: Output of render_result

    Returns:
        Messages that were sent
    """
    sent: list[Message] = []
    for block in blocks:
        if block.kind == BlockKind.LOADING:
            sent.append(await message.answer(f"⏳ {block.text}"))

        elif block.kind == BlockKind.ALERT:
            sent.append(await message.answer(f"❌ {html.escape(block.text)}", parse_mode="HTML"))

        elif block.kind == BlockKind.COMPARISON:
            if len(block.images) > 1:
                media = [
                    InputMediaPhoto(media=_photo(image.data_uri, image.title.lower()), caption=image.title)
                    for image in block.images
                ]
                sent.extend(await message.answer_media_group(media))
            else:
                image = block.images[0]
                sent.append(
                    await message.answer_photo(
                        _photo(image.data_uri, image.title.lower()),
                        caption=f"{block.title} · {image.title}",
                    )
                )

        else:
            sent.append(
                await message.answer(
                    f"<b>{html.escape(block.title)}</b>\n\n{html.escape(block.text)}",
                    parse_mode="HTML",
                )
            )

    logger.debug(f"Sent {len(sent)} message(s) for {len(blocks)} block(s)")
    return sent

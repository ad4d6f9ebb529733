"""Tests for the input panel and result delivery."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.types import BufferedInputFile, InputMediaPhoto

from room_designer.bot.views import (
    GENERATE,
    RESET,
    CategoryChoice,
    ModeChoice,
    build_form_keyboard,
    build_form_text,
    send_blocks,
)
from room_designer.models import FormState, InputMode, ResultState, SubjectCategory, VisualStyle
from room_designer.renderer import Block, BlockKind, Image
from room_designer.utils.file_handler import to_data_uri

AFTER = to_data_uri(b"after", "image/png")
BEFORE = to_data_uri(b"before", "image/jpeg")


def buttons(markup):
    return [[(button.text, button.callback_data) for button in row] for row in markup.inline_keyboard]


def test_keyboard_layout_and_active_marks():
    form = FormState(subject_category=SubjectCategory.GIRL, visual_style=VisualStyle.ELEGANT)
    rows = buttons(build_form_keyboard(form, ResultState()))

    assert [len(row) for row in rows] == [2, 3, 3, 1]
    assert rows[0][0] == ("✅ 📷 Upload photo", "mode:photo")
    assert rows[0][1] == ("✍️ Describe room", "mode:description")
    assert rows[1][1] == ("✅ Girl", "category:girl")
    assert rows[2][1] == ("✅ Elegant", "style:elegant")
    assert rows[3][0] == ("✨ Generate ideas", GENERATE)


def test_keyboard_while_loading():
    rows = buttons(build_form_keyboard(FormState(), ResultState(is_loading=True)))
    assert rows[-1][0] == ("⏳ Generating...", GENERATE)


def test_keyboard_after_result_offers_generate_again():
    rows = buttons(build_form_keyboard(FormState(), ResultState(generated_image_data_uri=AFTER)))
    assert rows[-1][0] == ("🔄 Generate again", RESET)


def test_callback_data_round_trip():
    assert ModeChoice.unpack("mode:description").value == InputMode.DESCRIPTION
    assert CategoryChoice(value=SubjectCategory.NEUTRAL).pack() == "category:neutral"


def test_form_text_escapes_description():
    form = FormState(input_mode=InputMode.DESCRIPTION, description_text="<b>big</b> room")
    assert "&lt;b&gt;big&lt;/b&gt; room" in build_form_text(form)


def test_form_text_photo_state():
    assert "Send a photo" in build_form_text(FormState())


def chat_message():
    message = MagicMock()
    message.answer = AsyncMock(return_value=MagicMock())
    message.answer_photo = AsyncMock(return_value=MagicMock())
    message.answer_media_group = AsyncMock(return_value=[MagicMock(), MagicMock()])
    return message


@pytest.mark.asyncio
async def test_send_blocks_before_after_as_album():
    message = chat_message()
    block = Block(BlockKind.COMPARISON, title="t", images=(Image("Before", BEFORE), Image("After", AFTER)))

    sent = await send_blocks(message, [block])

    assert len(sent) == 2
    media = message.answer_media_group.call_args.args[0]
    assert all(isinstance(item, InputMediaPhoto) for item in media)
    assert [item.caption for item in media] == ["Before", "After"]
    assert media[1].media.data == b"after"


@pytest.mark.asyncio
async def test_send_blocks_single_suggestion_and_panels():
    message = chat_message()
    blocks = [
        Block(BlockKind.COMPARISON, title="Our visual suggestion", images=(Image("Suggestion", AFTER),)),
        Block(BlockKind.TIPS, title="Decoration tips", text="Soft rug & lamp"),
        Block(BlockKind.ALERT, text="timeout"),
    ]

    await send_blocks(message, blocks)

    photo = message.answer_photo.call_args.args[0]
    assert isinstance(photo, BufferedInputFile)
    assert photo.filename == "suggestion.png"
    texts = [call.args[0] for call in message.answer.call_args_list]
    assert texts == ["<b>Decoration tips</b>\n\nSoft rug &amp; lamp", "❌ timeout"]

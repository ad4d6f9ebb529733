"""Handlers for room photos and typed descriptions."""

import logging

from aiogram import Bot, F, Router
from aiogram.types import Message

from room_designer.bot.sessions import DesignerSessions
from room_designer.bot.views import send_form
from room_designer.models import InputMode
from room_designer.utils.file_handler import cleanup_file, download_photo, is_image_message

logger = logging.getLogger(__name__)

router = Router()


@router.message(F.photo | F.document)
async def handle_photo(message: Message, bot: Bot, sessions: DesignerSessions) -> None:
    """Store the room photo and switch the form to photo mode."""
    chat_id = message.chat.id
    logger.info(f"[CHAT {chat_id}] Received message type: {message.content_type}")

    if not is_image_message(message):
        await message.answer("📸 Please send an image file (JPEG, PNG, WEBP...).")
        return

    designer = sessions.get(chat_id)
    photo_path = await download_photo(bot, message)
    if not photo_path:
        logger.error(f"[CHAT {chat_id}] Failed to download photo")
        await message.answer("❌ Could not load the photo. Please try again.")
        return

    try:
        await designer.ingest_file(photo_path)
    finally:
        cleanup_file(photo_path)

    designer.set_input_mode(InputMode.PHOTO)
    logger.info(f"[CHAT {chat_id}] Photo stored, form in photo mode")
    await send_form(message, designer.form, designer.result)


@router.message(F.text & ~F.text.startswith("/"))
async def handle_description(message: Message, sessions: DesignerSessions) -> None:
    """Store the typed room description and switch the form to description mode."""
    chat_id = message.chat.id
    designer = sessions.get(chat_id)

    description = message.text.strip()
    if not description:
        await message.answer("Please describe the room in a few words.")
        return

    designer.set_description_text(description)
    designer.set_input_mode(InputMode.DESCRIPTION)
    logger.info(f"[CHAT {chat_id}] Description stored: {description[:100]}...")
    await send_form(message, designer.form, designer.result)

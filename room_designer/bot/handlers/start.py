"""Handlers for /start, /design and /reset commands."""

import logging

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from room_designer.bot.sessions import DesignerSessions
from room_designer.bot.states import GenerationStates
from room_designer.bot.views import send_form

logger = logging.getLogger(__name__)

router = Router()


@router.message(CommandStart())
async def cmd_start(message: Message, state: FSMContext, sessions: DesignerSessions) -> None:
    """Greet the user and open a fresh form."""
    chat_id = message.chat.id
    logger.info(f"[CHAT {chat_id}] [COMMAND: /start] Opening new form")

    sessions.drop(chat_id)
    designer = sessions.get(chat_id)
    await state.set_state(GenerationStates.IDLE)

    await message.answer(
        "👶 Turn any room into the perfect nursery!\n\n"
        "1️⃣ Send a photo of the room, or switch to <b>Describe room</b> and type a description.\n"
        "2️⃣ Choose who the nursery is for and the style.\n"
        "3️⃣ Press <b>Generate ideas</b> to get a design plus decoration tips and baby essentials.",
        parse_mode="HTML",
    )
    await send_form(message, designer.form, designer.result)


@router.message(Command("design"))
async def cmd_design(message: Message, sessions: DesignerSessions) -> None:
    """Show the input panel again."""
    designer = sessions.get(message.chat.id)
    await send_form(message, designer.form, designer.result)


@router.message(Command("reset"))
async def cmd_reset(message: Message, state: FSMContext, sessions: DesignerSessions) -> None:
    """Clear the room data and results, keeping the chosen options."""
    chat_id = message.chat.id
    designer = sessions.get(chat_id)
    designer.reset()
    await state.set_state(GenerationStates.IDLE)
    logger.info(f"[CHAT {chat_id}] [COMMAND: /reset] Form cleared")

    await send_form(message, designer.form, designer.result)

"""Handlers for the input panel buttons and the generation flow."""

import logging

from aiogram import F, Router
from aiogram.exceptions import TelegramBadRequest
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from room_designer.bot.sessions import DesignerSessions
from room_designer.bot.states import GenerationStates
from room_designer.bot.views import (
    GENERATE,
    RESET,
    CategoryChoice,
    ModeChoice,
    StyleChoice,
    build_form_keyboard,
    build_form_text,
    send_blocks,
    send_form,
)
from room_designer.designer import RoomDesigner
from room_designer.exceptions import SubmissionInProgressError
from room_designer.models import ResultState
from room_designer.renderer import render_result

logger = logging.getLogger(__name__)

router = Router()


async def refresh_form(callback: CallbackQuery, designer: RoomDesigner) -> None:
    """Redraw the panel the button belongs to."""
    if not isinstance(callback.message, Message):
        return
    try:
        await callback.message.edit_text(
            build_form_text(designer.form),
            reply_markup=build_form_keyboard(designer.form, designer.result),
            parse_mode="HTML",
        )
    except TelegramBadRequest as e:
        # Telegram refuses edits that change nothing
        logger.debug(f"Panel not edited: {e}")


async def redraw_keyboard(panel: Message, designer: RoomDesigner, result: ResultState) -> None:
    """Swap the panel buttons to reflect a run starting or ending."""
    try:
        await panel.edit_reply_markup(reply_markup=build_form_keyboard(designer.form, result))
    except TelegramBadRequest as e:
        logger.debug(f"Panel buttons not edited: {e}")


@router.callback_query(ModeChoice.filter())
async def choose_mode(
    callback: CallbackQuery, callback_data: ModeChoice, sessions: DesignerSessions
) -> None:
    designer = sessions.get(callback.message.chat.id)
    designer.set_input_mode(callback_data.value)
    await refresh_form(callback, designer)
    await callback.answer()


@router.callback_query(CategoryChoice.filter())
async def choose_category(
    callback: CallbackQuery, callback_data: CategoryChoice, sessions: DesignerSessions
) -> None:
    designer = sessions.get(callback.message.chat.id)
    designer.set_subject_category(callback_data.value)
    await refresh_form(callback, designer)
    await callback.answer()


@router.callback_query(StyleChoice.filter())
async def choose_style(
    callback: CallbackQuery, callback_data: StyleChoice, sessions: DesignerSessions
) -> None:
    designer = sessions.get(callback.message.chat.id)
    designer.set_visual_style(callback_data.value)
    await refresh_form(callback, designer)
    await callback.answer()


@router.callback_query(F.data == GENERATE)
async def generate(callback: CallbackQuery, state: FSMContext, sessions: DesignerSessions) -> None:
    """Handle the Generate ideas button."""
    chat_id = callback.message.chat.id
    designer = sessions.get(chat_id)

    if designer.is_busy:
        await callback.answer("Still generating, please wait...")
        return

    await callback.answer()
    await process_generation(callback.message, state, designer)


@router.callback_query(F.data == RESET)
async def generate_again(
    callback: CallbackQuery, state: FSMContext, sessions: DesignerSessions
) -> None:
    """Handle the Generate again button."""
    chat_id = callback.message.chat.id
    designer = sessions.get(chat_id)
    designer.reset()
    await state.set_state(GenerationStates.IDLE)
    logger.info(f"[CHAT {chat_id}] [STATE: IDLE] Form reset for a new design")

    await callback.answer()
    await send_form(callback.message, designer.form, designer.result)


async def process_generation(message: Message, state: FSMContext, designer: RoomDesigner) -> None:
    """Run one submission and show its outcome."""
    chat_id = message.chat.id

    if not designer.form.has_input:
        await designer.submit()
        await send_blocks(message, render_result(designer.form, designer.result))
        return

    await state.set_state(GenerationStates.PROCESSING)
    logger.info(f"[CHAT {chat_id}] [STATE: PROCESSING] Starting generation process")

    loading = await send_blocks(message, render_result(designer.form, ResultState(is_loading=True)))
    await redraw_keyboard(message, designer, ResultState(is_loading=True))

    try:
        result = await designer.submit()
    except SubmissionInProgressError as e:
        logger.info(f"[CHAT {chat_id}] {e}")
        return
    finally:
        for sent in loading:
            try:
                await sent.delete()
            except TelegramBadRequest as e:
                logger.debug(f"Loading message not deleted: {e}")
        await redraw_keyboard(message, designer, designer.result)

    if result.error_message:
        await state.set_state(GenerationStates.FAILED)
        logger.info(f"[CHAT {chat_id}] [STATE: FAILED] {result.error_message}")
    elif result.generated_image_data_uri:
        await state.set_state(GenerationStates.SHOW_RESULT)
        logger.info(f"[CHAT {chat_id}] [STATE: SHOW_RESULT] Design delivered")
    else:
        # Cancelled by a reset while in flight
        logger.info(f"[CHAT {chat_id}] Generation cancelled, nothing to show")
        return

    await send_blocks(message, render_result(designer.form, result))
    await send_form(message, designer.form, result)

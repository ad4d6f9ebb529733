"""Middleware for logging and error handling."""

import logging
from typing import Any, Awaitable, Callable

from aiogram import BaseMiddleware
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message, TelegramObject

logger = logging.getLogger(__name__)


async def _current_state(data: dict[str, Any]) -> str:
    state: FSMContext | None = data.get("state")
    if state is None:
        return "UNKNOWN"
    current_state = await state.get_state()
    return str(current_state) if current_state else "NONE"


class LoggingMiddleware(BaseMiddleware):
    """Middleware for logging user actions."""

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        """Log user action."""
        if isinstance(event, Message):
            text = event.text or (event.caption or "")
            logger.info(
                f"[CHAT {event.chat.id}] [STATE: {await _current_state(data)}] "
                f"Content: {event.content_type} - {text[:100]}"
            )
        elif isinstance(event, CallbackQuery):
            chat_id = event.message.chat.id if event.message else None
            logger.info(
                f"[CHAT {chat_id}] [STATE: {await _current_state(data)}] Button: {event.data}"
            )

        return await handler(event, data)


class ErrorHandlerMiddleware(BaseMiddleware):
    """Middleware for error handling."""

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        """Log the error, tell the user and re-raise."""
        try:
            return await handler(event, data)
        except Exception as e:
            logger.error(f"Error in handler: {e}", exc_info=True)

            message = event.message if isinstance(event, CallbackQuery) else event
            if isinstance(message, Message):
                try:
                    await message.answer(
                        "❌ Something went wrong. Try again or use /start to begin anew."
                    )
                except Exception as notify_error:
                    logger.error(f"Failed to notify user: {notify_error}")

            # Re-raise to let aiogram handle it
            raise

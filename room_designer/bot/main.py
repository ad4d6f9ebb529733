"""Main bot file."""

import asyncio
import logging
import sys

import structlog
from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage
from dotenv import load_dotenv

from room_designer.bot.handlers import design, photos, start
from room_designer.bot.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from room_designer.bot.sessions import DesignerSessions
from room_designer.config import LoggingConfig, get_config

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s · %(levelname)s · %(name)s · %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig) -> None:
    """Apply level and output format to the root logger.

    With format "json" every root handler renders records as JSON lines.
    """
    logging.getLogger().setLevel(getattr(logging, config.level.upper(), logging.INFO))
    if config.format.lower() != "json":
        return

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )
    for handler in logging.getLogger().handlers:
        handler.setFormatter(formatter)


def create_dispatcher(sessions: DesignerSessions | None = None) -> Dispatcher:
    """Build dispatcher with middlewares, routers and designer sessions."""
    if sessions is None:
        limits = get_config().sessions
        sessions = DesignerSessions(max_sessions=limits.max_sessions, idle_ttl=limits.idle_ttl)
    dp = Dispatcher(storage=MemoryStorage(), sessions=sessions)

    # Register middleware (order matters!)
    for observer in (dp.message, dp.callback_query):
        observer.middleware(LoggingMiddleware())
        observer.middleware(ErrorHandlerMiddleware())  # Error handling last

    # Commands first so they are not taken as room descriptions
    dp.include_router(start.router)
    dp.include_router(design.router)
    dp.include_router(photos.router)

    dp.shutdown.register(sessions.close_all)
    return dp


async def main() -> None:
    """Main entry point."""
    try:
        config = get_config()

        configure_logging(config.logging)

        logger.info("Starting Room Designer Bot...")
        if not config.gemini.api_key:
            logger.warning("GEMINI_API_KEY is not set, every generation will fail")
        if not config.telegram.bot_token:
            logger.error("TELEGRAM_BOT_TOKEN is not set, cannot start the bot")
            sys.exit(1)

        bot = Bot(token=config.telegram.bot_token)
        dp = create_dispatcher()

        logger.info("Bot initialized successfully")

        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())

    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
    finally:
        logger.info("Shutting down...")


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()

"""File handling utilities for Telegram bot."""

import base64
import logging
import tempfile
from pathlib import Path

from aiogram import Bot
from aiogram.types import Message

logger = logging.getLogger(__name__)


def is_image_message(message: Message) -> bool:
    """True for photos and for documents sent with an image MIME type."""
    if message.photo:
        return True
    document = message.document
    return bool(document and (document.mime_type or "").startswith("image/"))


async def download_photo(bot: Bot, message: Message) -> Path | None:
    """Download photo (or image document) from Telegram message.

    Args:
        bot: Telegram bot instance
        message: Message with photo or image document

    Returns:
        Path to downloaded image file, or None if error
    """
    if not is_image_message(message):
        return None

    try:
        if message.photo:
            # Get largest photo
            photo = message.photo[-1]
            file_id = photo.file_id
            suffix = ".jpg"
        else:
            file_id = message.document.file_id
            suffix = Path(message.document.file_name or "").suffix or ".img"

        file_info = await bot.get_file(file_id)

        temp_file = Path(tempfile.gettempdir()) / f"room_{file_id}{suffix}"
        await bot.download_file(file_info.file_path, temp_file)

        logger.info(f"Photo downloaded: {temp_file}, size: {temp_file.stat().st_size}")
        return temp_file

    except Exception as e:
        logger.error(f"Error downloading photo: {e}", exc_info=True)
        return None


def detect_mime_type(data: bytes, default: str = "image/jpeg") -> str:
    """Detect image MIME type from magic bytes.

    Args:
        data: Image bytes
        default: Returned when the format is not recognised

    Returns:
        MIME type string
    """
    if data.startswith(b"\xff\xd8"):
        return "image/jpeg"
    if data.startswith(b"\x89PNG"):
        return "image/png"
    if data.startswith(b"GIF"):
        return "image/gif"
    if data[8:12] == b"WEBP":
        return "image/webp"
    return default


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Encode bytes as ``data:<mime>;base64,<payload>``."""
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def from_data_uri(data_uri: str) -> tuple[bytes, str]:
    """Decode a base64 data URI.

    Args:
        data_uri: String produced by to_data_uri

    Returns:
        Tuple of (bytes, mime type)

    Raises:
        ValueError: If the string is not a base64 data URI
    """
    header, sep, payload = data_uri.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Not a base64 data URI")
    mime_type = header[len("data:") : -len(";base64")]
    return base64.b64decode(payload), mime_type


def read_file_bytes(file_path: Path) -> bytes:
    """Read file as bytes.

    Args:
        file_path: Path to file

    Returns:
        File contents as bytes

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    return file_path.read_bytes()


def cleanup_file(file_path: Path) -> None:
    """Delete temporary file.

    Args:
        file_path: Path to file to delete
    """
    try:
        if file_path.exists():
            file_path.unlink()
            logger.debug(f"Cleaned up file: {file_path}")
    except OSError as e:
        logger.warning(f"Error cleaning up file {file_path}: {e}")

"""Per-chat room designer sessions."""

import logging
import time
from collections import OrderedDict
from typing import Callable

from room_designer.designer import RoomDesigner
from room_designer.services.gemini_client import GeminiClient

logger = logging.getLogger(__name__)


class DesignerSessions:
    """In-memory registry of one RoomDesigner per chat.

    Sessions idle for longer than ``idle_ttl`` seconds are evicted, and when
    more than ``max_sessions`` chats are active the least recently used one
    goes first. Evicted designers have their in-flight submission cancelled.
    """

    def __init__(
        self,
        gemini_client: GeminiClient | None = None,
        max_sessions: int = 1000,
        idle_ttl: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._gemini_client = gemini_client
        self._max_sessions = max_sessions
        self._idle_ttl = idle_ttl
        self._clock = clock
        # chat_id -> (designer, last seen), oldest first
        self._designers: OrderedDict[int, tuple[RoomDesigner, float]] = OrderedDict()

    def get(self, chat_id: int) -> RoomDesigner:
        now = self._clock()
        self._evict_idle(now)

        entry = self._designers.pop(chat_id, None)
        if entry is None:
            designer = RoomDesigner(gemini_client=self._gemini_client, session_id=chat_id)
            logger.info(f"[CHAT {chat_id}] New designer session")
        else:
            designer = entry[0]
        self._designers[chat_id] = (designer, now)

        while len(self._designers) > self._max_sessions:
            old_chat_id, (old_designer, _) = self._designers.popitem(last=False)
            self._evict(old_chat_id, old_designer, "session limit reached")
        return designer

    def drop(self, chat_id: int) -> None:
        entry = self._designers.pop(chat_id, None)
        if entry is not None:
            entry[0].cancel()

    def __len__(self) -> int:
        return len(self._designers)

    def __contains__(self, chat_id: int) -> bool:
        return chat_id in self._designers

    def _evict_idle(self, now: float) -> None:
        while self._designers:
            chat_id, (designer, last_seen) = next(iter(self._designers.items()))
            if now - last_seen <= self._idle_ttl:
                break
            del self._designers[chat_id]
            self._evict(chat_id, designer, "idle")

    @staticmethod
    def _evict(chat_id: int, designer: RoomDesigner, reason: str) -> None:
        cancelled = designer.cancel()
        logger.info(
            f"[CHAT {chat_id}] Designer session evicted ({reason})"
            + (", in-flight submission cancelled" if cancelled else "")
        )

    async def close_all(self) -> None:
        """Cancel in-flight submissions of every session."""
        cancelled = sum(1 for designer, _ in self._designers.values() if designer.cancel())
        self._designers.clear()
        logger.info(f"Designer sessions closed, cancelled {cancelled} submission(s)")

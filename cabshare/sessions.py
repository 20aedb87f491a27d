"""Per-user conversation state.

Every user identity gets one :class:`Session` for the lifetime of the
process. Callers work with a session only inside
:meth:`SessionStore.checkout`, which holds that session's lock, so two
messages from the same user are never processed at the same time.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Optional

from .locations import Location
from .models import RideRequest

logger = logging.getLogger(__name__)


class State(Enum):
    MAIN_MENU = "MAIN_MENU"
    AWAITING_PICKUP = "AWAITING_PICKUP"
    AWAITING_DROP = "AWAITING_DROP"
    AWAITING_DATE = "AWAITING_DATE"
    AWAITING_TIME = "AWAITING_TIME"
    # post-ride follow-up, not wired to any flow yet
    AWAITING_FEEDBACK = "AWAITING_FEEDBACK"


@dataclass
class Draft:
    pickup: Optional[Location] = None
    drop: Optional[Location] = None
    date: Optional[date] = None
    time: Optional[time] = None

    def is_complete(self) -> bool:
        return None not in (self.pickup, self.drop, self.date, self.time)

    def to_request(self) -> RideRequest:
        if not self.is_complete():
            raise ValueError("draft is missing fields")
        return RideRequest(self.pickup, self.drop, self.date, self.time)

    def clear(self):
        self.pickup = self.drop = self.date = self.time = None


class Session:
    def __init__(self, user_id: str):
        self.user_id = user_id
        self.state = State.MAIN_MENU
        self.draft = Draft()
        self.created_at = datetime.now()
        self.last_seen = self.created_at
        self._lock = threading.Lock()

    def reset(self):
        self.state = State.MAIN_MENU
        self.draft.clear()

    def __repr__(self):
        return f"<Session {self.user_id} {self.state.value}>"


class SessionStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._sessions = {}

    @contextmanager
    def checkout(self, user_id: str):
        """Yield ``(session, created)`` with the session locked for this user."""
        with self._lock:
            session = self._sessions.get(user_id)
            created = session is None
            if created:
                logger.info("Creating new session for user %s", user_id)
                session = self._sessions[user_id] = Session(user_id)
        with session._lock:
            session.last_seen = datetime.now()
            yield session, created

    def get(self, user_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(user_id)

    def __len__(self):
        with self._lock:
            return len(self._sessions)

import logging
from abc import ABC, abstractmethod
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

from . import texts
from .models import Participant, Ride

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Outbound side of the chat transport."""

    @abstractmethod
    def send_message(self, user_id: str, text: str) -> bool:
        """Send ``text`` to ``user_id``. Return False on failure, never raise."""


@dataclass(frozen=True)
class Delivery:
    user_id: str
    ok: bool
    error: Optional[str] = None


class NotificationDispatcher:
    def __init__(self, transport: Transport, executor: Optional[Executor] = None):
        self.transport = transport
        self.executor = executor or ThreadPoolExecutor(thread_name_prefix="notify")

    def dispatch(self, ride: Ride) -> List[Future]:
        """Tell every participant of ``ride`` about the match.

        Each send runs on its own; one recipient failing does not stop the rest.
        Returns one future per participant resolving to a :class:`Delivery`.
        """
        text = texts.match_found(ride)
        return [self.executor.submit(self._deliver, p, text) for p in ride.participants]

    def _deliver(self, participant: Participant, text: str) -> Delivery:
        try:
            ok = self.transport.send_message(participant.user_id, text)
        except Exception as e:
            logger.exception("Notification to %s failed", participant.user_id)
            return Delivery(participant.user_id, False, str(e))
        if not ok:
            logger.warning("Notification to %s was not delivered", participant.user_id)
            return Delivery(participant.user_id, False, "not delivered")
        logger.info("Notified participant: %s", participant.user_id)
        return Delivery(participant.user_id, True)

    def shutdown(self, wait=True):
        self.executor.shutdown(wait=wait)

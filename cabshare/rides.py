import itertools
import logging
import threading
from datetime import date
from typing import List, Optional

from .models import MATCH_WINDOW_MINUTES, Participant, Ride, RideRequest, RideStatus

logger = logging.getLogger(__name__)


class RideStore:
    """All rides of the process, behind a single lock.

    Everything handed out is a snapshot; only the store mutates its rides.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._rides = {}  # ride id -> Ride, in creation order
        self._ids = itertools.count(1)

    def create(self, request: RideRequest, participant: Participant) -> Ride:
        with self._lock:
            ride = Ride(
                id=next(self._ids),
                pickup=request.pickup,
                drop=request.drop,
                date=request.date,
                time=request.time,
                participants=[participant],
            )
            self._rides[ride.id] = ride
            logger.info("Created ride %s for %s", ride.id, participant.user_id)
            return ride.snapshot()

    def try_join(self, ride_id: int, participant: Participant) -> bool:
        with self._lock:
            ride = self._rides.get(ride_id)
            if ride is None or not ride.can_join():
                return False
            ride.participants.append(participant)
            if ride.is_full:
                ride.status = RideStatus.CLOSED
                logger.info("Ride %s is now full", ride_id)
            return True

    def find_candidates(self, request: RideRequest, window: int = MATCH_WINDOW_MINUTES) -> List[Ride]:
        with self._lock:
            return [
                ride.snapshot()
                for ride in self._rides.values()
                if request.is_compatible_with(ride, window)
            ]

    def get(self, ride_id: int) -> Optional[Ride]:
        with self._lock:
            ride = self._rides.get(ride_id)
            return ride.snapshot() if ride else None

    def rides_for(self, user_id: str) -> List[Ride]:
        with self._lock:
            return [r.snapshot() for r in self._rides.values() if r.has_participant(user_id)]

    def purge_before(self, day: date) -> int:
        """Drop rides dated strictly before ``day``; returns how many went."""
        with self._lock:
            stale = [rid for rid, r in self._rides.items() if r.date < day]
            for rid in stale:
                del self._rides[rid]
        if stale:
            logger.info("Purged %d rides dated before %s", len(stale), day)
        return len(stale)

    def __len__(self):
        with self._lock:
            return len(self._rides)

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from enum import Enum
from typing import List

from .locations import Location

MAX_PARTICIPANTS = 4
MATCH_WINDOW_MINUTES = 30


class RideStatus(Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


@dataclass(frozen=True)
class Participant:
    user_id: str
    contact: str
    joined_at: datetime = field(default_factory=datetime.now)


def minutes_of_day(t: time) -> int:
    return t.hour * 60 + t.minute


@dataclass(frozen=True)
class RideRequest:
    """A fully collected request: where from, where to, and when."""
    pickup: Location
    drop: Location
    date: date
    time: time

    def minutes_apart(self, other: time) -> int:
        return abs(minutes_of_day(self.time) - minutes_of_day(other))

    def is_compatible_with(self, ride: "Ride", window: int = MATCH_WINDOW_MINUTES) -> bool:
        # exact locations and date; time within the window, both ends inclusive
        return (
            ride.pickup == self.pickup
            and ride.drop == self.drop
            and ride.date == self.date
            and self.minutes_apart(ride.time) <= window
            and ride.can_join()
        )


@dataclass
class Ride:
    id: int
    pickup: Location
    drop: Location
    date: date
    time: time
    participants: List[Participant] = field(default_factory=list)
    status: RideStatus = RideStatus.OPEN
    created_at: datetime = field(default_factory=datetime.now)
    max_participants: int = MAX_PARTICIPANTS

    @property
    def seats_left(self) -> int:
        return self.max_participants - len(self.participants)

    @property
    def is_full(self) -> bool:
        return self.seats_left <= 0

    def can_join(self) -> bool:
        return self.status is RideStatus.OPEN and not self.is_full

    def has_participant(self, user_id: str) -> bool:
        return any(p.user_id == user_id for p in self.participants)

    def snapshot(self) -> "Ride":
        return replace(self, participants=list(self.participants))

import logging
from concurrent.futures import Future
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .models import MATCH_WINDOW_MINUTES, Participant, Ride, RideRequest
from .notify import NotificationDispatcher
from .rides import RideStore

logger = logging.getLogger(__name__)


class MatchOutcome(Enum):
    JOINED = "JOINED"
    CREATED = "CREATED"
    ALREADY_MEMBER = "ALREADY_MEMBER"


@dataclass
class MatchResult:
    outcome: MatchOutcome
    ride: Ride
    deliveries: List[Future] = field(default_factory=list)


class MatchingEngine:
    def __init__(self, store: RideStore, dispatcher: NotificationDispatcher,
                 window: int = MATCH_WINDOW_MINUTES):
        self.store = store
        self.dispatcher = dispatcher
        self.window = window

    def match(self, request: RideRequest, participant: Participant) -> MatchResult:
        """Join the earliest compatible open ride, or open a new one."""
        logger.info("Searching for matching rides...")
        for candidate in self.store.find_candidates(request, self.window):
            if candidate.has_participant(participant.user_id):
                logger.info("%s is already in ride %s", participant.user_id, candidate.id)
                return MatchResult(MatchOutcome.ALREADY_MEMBER, candidate)
            if self.store.try_join(candidate.id, participant):
                ride = self.store.get(candidate.id)
                logger.info("Found matching ride: %s", ride.id)
                # store lock is released here; sends run on the dispatcher's pool
                deliveries = self.dispatcher.dispatch(ride)
                return MatchResult(MatchOutcome.JOINED, ride, deliveries)
            logger.info("Ride %s filled up before %s could join", candidate.id, participant.user_id)

        logger.info("No matches found, creating new ride")
        return MatchResult(MatchOutcome.CREATED, self.store.create(request, participant))

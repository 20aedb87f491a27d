from concurrent.futures import ThreadPoolExecutor
from datetime import date, time

import pytest

from cabshare.bot import CabShareBot
from cabshare.locations import DROP_LOCATIONS, PICKUP_LOCATIONS
from cabshare.models import Participant, RideRequest
from cabshare.notify import NotificationDispatcher, Transport

TODAY = date(2025, 5, 20)


class FakeTransport(Transport):
    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    def send_message(self, user_id, text):
        if user_id in self.fail_for:
            return False
        self.sent.append((user_id, text))
        return True

    def messages_for(self, user_id):
        return [text for uid, text in self.sent if uid == user_id]


def make_request(t="10:00", day=date(2025, 6, 1), pickup="1", drop="1"):
    hh, mm = t.split(":")
    return RideRequest(PICKUP_LOCATIONS[pickup], DROP_LOCATIONS[drop], day, time(int(hh), int(mm)))


def participant(user_id):
    return Participant(user_id, f"@{user_id}")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=4)
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def bot(transport, executor):
    return CabShareBot(
        transport,
        dispatcher=NotificationDispatcher(transport, executor),
        today=lambda: TODAY,
        retention_days=1,
    )

import logging
from datetime import date, timedelta

from . import config, texts
from .locations import DROP_LOCATIONS, PICKUP_LOCATIONS, lookup
from .matching import MatchingEngine, MatchOutcome
from .models import Participant
from .notify import NotificationDispatcher
from .rides import RideStore
from .sessions import SessionStore, State
from .validation import InvalidInput, parse_date, parse_time

logger = logging.getLogger(__name__)

RESET_COMMANDS = ("/start", "/menu", "/cancel")


class CabShareBot:
    """Conversation core: one inbound text in, zero or more messages out."""

    def __init__(self, transport, sessions=None, rides=None, dispatcher=None,
                 today=date.today, retention_days=None):
        self.transport = transport
        self.sessions = sessions if sessions is not None else SessionStore()
        self.rides = rides if rides is not None else RideStore()
        self.dispatcher = dispatcher or NotificationDispatcher(transport)
        self.matcher = MatchingEngine(self.rides, self.dispatcher)
        self.today = today
        if retention_days is None:
            retention_days = config.RIDE_RETENTION_DAYS
        self.retention_days = config.check_at_least("retention_days", retention_days, 0)
        self._handlers = {
            State.MAIN_MENU: self._on_main_menu,
            State.AWAITING_PICKUP: self._on_pickup,
            State.AWAITING_DROP: self._on_drop,
            State.AWAITING_DATE: self._on_date,
            State.AWAITING_TIME: self._on_time,
            State.AWAITING_FEEDBACK: self._on_feedback,
        }

    def handle_inbound(self, user_id, text, contact=None):
        user_id = str(user_id)
        text = (text or "").strip()
        logger.info("New message from %s: %s", user_id, text)
        with self.sessions.checkout(user_id) as (session, created):
            try:
                if created:
                    self.reply(user_id, texts.MAIN_MENU)
                    return
                if text.lower() in RESET_COMMANDS:
                    session.reset()
                    if text.lower() == "/cancel":
                        self.reply(user_id, texts.CANCELLED)
                    self.reply(user_id, texts.MAIN_MENU)
                    return
                logger.info("Handling input in state %s: %s", session.state.value, text)
                self._handlers[session.state](session, text, contact or user_id)
            except Exception:
                logger.exception("Error handling message from %s", user_id)
                session.reset()
                self.reply(user_id, texts.SOMETHING_WENT_WRONG)
                self.reply(user_id, texts.MAIN_MENU)

    def reply(self, user_id, text):
        if not self.transport.send_message(user_id, text):
            logger.warning("Reply to %s was not delivered", user_id)

    # ------------- State handlers -------------
    def _on_main_menu(self, session, text, contact):
        if text == "1":
            session.draft.clear()
            session.state = State.AWAITING_PICKUP
            self.reply(session.user_id, texts.pickup_prompt())
        elif text == "2":
            today = self.today()
            active = [r for r in self.rides.rides_for(session.user_id) if r.date >= today]
            self.reply(session.user_id, texts.my_rides(active))
        elif text == "3":
            self.reply(session.user_id, texts.LIVE_LOCATION)
        elif text == "4":
            self.reply(session.user_id, texts.HELP)
        else:
            self.reply(session.user_id, texts.INVALID_MENU_OPTION)
            self.reply(session.user_id, texts.MAIN_MENU)

    def _on_pickup(self, session, text, contact):
        location = lookup(PICKUP_LOCATIONS, text)
        if location is None:
            self.reply(session.user_id, texts.INVALID_PICKUP)
            return
        logger.info("User selected pickup location: %s", location.name)
        session.draft.pickup = location
        session.state = State.AWAITING_DROP
        self.reply(session.user_id, texts.drop_prompt())

    def _on_drop(self, session, text, contact):
        location = lookup(DROP_LOCATIONS, text)
        if location is None:
            self.reply(session.user_id, texts.INVALID_DROP)
            return
        logger.info("User selected drop location: %s", location.name)
        session.draft.drop = location
        session.state = State.AWAITING_DATE
        self.reply(session.user_id, texts.DATE_PROMPT)

    def _on_date(self, session, text, contact):
        try:
            session.draft.date = parse_date(text, self.today())
        except InvalidInput as e:
            self.reply(session.user_id, texts.invalid(e.reason))
            return
        logger.info("User selected date: %s", session.draft.date)
        session.state = State.AWAITING_TIME
        self.reply(session.user_id, texts.TIME_PROMPT)

    def _on_time(self, session, text, contact):
        try:
            session.draft.time = parse_time(text)
        except InvalidInput as e:
            self.reply(session.user_id, texts.invalid(e.reason))
            return
        logger.info("User selected time: %s", session.draft.time)
        if session.draft.date < self.today():
            # the day rolled over while the user was typing
            session.draft.date = session.draft.time = None
            session.state = State.AWAITING_DATE
            self.reply(session.user_id, texts.invalid("That date has already passed."))
            self.reply(session.user_id, texts.DATE_PROMPT)
            return
        request = session.draft.to_request()
        try:
            result = self.matcher.match(request, Participant(session.user_id, contact))
        finally:
            session.reset()
        if result.outcome is MatchOutcome.CREATED:
            self.reply(session.user_id, texts.ride_created(result.ride))
        elif result.outcome is MatchOutcome.ALREADY_MEMBER:
            self.reply(session.user_id, texts.already_member(result.ride))
        self.rides.purge_before(self.today() - timedelta(days=self.retention_days))

    def _on_feedback(self, session, text, contact):
        # feedback collection is not implemented; return to the menu
        session.reset()
        self.reply(session.user_id, texts.MAIN_MENU)

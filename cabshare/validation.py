import re
from datetime import date, datetime, time

DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")


class InvalidInput(ValueError):
    """User input that should be re-asked rather than escalated."""

    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason


def parse_date(text: str, today: date) -> date:
    text = text.strip()
    if not DATE_RE.match(text):
        raise InvalidInput("Invalid date format. Please use YYYY-MM-DD.")
    try:
        value = datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidInput(f"{text} is not a real calendar date.") from None
    if value < today:
        raise InvalidInput("Please select today or a future date.")
    return value


def parse_time(text: str) -> time:
    m = TIME_RE.match(text.strip())
    if not m:
        raise InvalidInput("Invalid time format. Please use HH:MM (Example: 14:30).")
    return time(int(m.group(1)), int(m.group(2)))

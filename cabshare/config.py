# ------------- SETTINGS -------------
import os


class ConfigError(RuntimeError):
    pass


def int_setting(name, default, minimum=0):
    raw = os.environ.get(name, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    return check_at_least(name, value, minimum)


def check_at_least(name, value, minimum):
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


BOT_TOKEN = os.environ.get("CABSHARE_BOT_TOKEN", "")
LOG_LEVEL = os.environ.get("CABSHARE_LOG_LEVEL", "INFO").upper()
NOTIFY_WORKERS = int_setting("CABSHARE_NOTIFY_WORKERS", 8, minimum=1)
# rides whose date is older than this many days are dropped from memory
RIDE_RETENTION_DAYS = int_setting("CABSHARE_RIDE_RETENTION_DAYS", 1)

POLL_TIMEOUT = 60


def require_token(token=None):
    token = token if token is not None else BOT_TOKEN
    if not token:
        raise ConfigError("CABSHARE_BOT_TOKEN is not set")
    return token

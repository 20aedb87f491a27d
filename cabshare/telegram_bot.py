# Telegram front end for the cab share core.
# Requires: pip install pytelegrambotapi
# Run: CABSHARE_BOT_TOKEN=... python3 -m cabshare

import logging
from concurrent.futures import ThreadPoolExecutor

import telebot

from . import config
from .bot import CabShareBot
from .notify import NotificationDispatcher, Transport

logger = logging.getLogger(__name__)


class TelegramTransport(Transport):
    def __init__(self, bot: telebot.TeleBot):
        self.bot = bot

    def send_message(self, user_id, text):
        try:
            self.bot.send_message(user_id, text, parse_mode='HTML')
        except Exception as e:
            logger.error("send_message to %s failed: %s", user_id, e)
            return False
        return True


def contact_for(message):
    user = message.from_user
    if user is None:
        return str(message.chat.id)
    if user.username:
        return f"@{user.username}"
    return f"{user.first_name or 'User'} ({user.id})"


def build_bot(token):
    bot = telebot.TeleBot(token)
    transport = TelegramTransport(bot)
    executor = ThreadPoolExecutor(max_workers=config.NOTIFY_WORKERS, thread_name_prefix="notify")
    core = CabShareBot(transport, dispatcher=NotificationDispatcher(transport, executor))

    @bot.message_handler(func=lambda m: True)
    def catch_all(message):
        core.handle_inbound(str(message.chat.id), message.text, contact=contact_for(message))

    return bot, core


def main():
    logging.basicConfig(level=config.LOG_LEVEL)
    token = config.require_token()
    bot, core = build_bot(token)
    logger.info("Bot starting...")
    try:
        bot.infinity_polling(timeout=config.POLL_TIMEOUT, long_polling_timeout=config.POLL_TIMEOUT)
    finally:
        core.dispatcher.shutdown(wait=False)
        logger.info("Bot stopped")


if __name__ == "__main__":
    main()

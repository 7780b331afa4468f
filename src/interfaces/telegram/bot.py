# src/interfaces/telegram/bot.py
"""Telegram bot implementation with python-telegram-bot.

Telegram is the private operator surface: only users on the allow-list may
talk to the bot, and the bot may only message allowed chats. Every update
passes the access gate in handler group -1 before any other handler runs.
Updates are processed one at a time, in arrival order.

In group chats the outbound gate checks the group's chat ID, not the
sender: an allowed operator's "/ping@Bot" in a group is dispatched, but
the reply is blocked unless the group ID (negative, e.g. -100500) is in
AUTHORIZED_USER_IDS too.
"""

import logging
from typing import Any

from telegram import Update
from telegram.error import NetworkError, TelegramError
from telegram.ext import (
    AIORateLimiter,
    Application,
    ApplicationHandlerStop,
    ContextTypes,
    MessageHandler,
    TypeHandler,
    filters,
)

from src.core.access.gate import AccessGate
from src.core.commands.dispatcher import CommandDispatcher
from src.core.commands.models import ChatId, ChatMessage
from src.utils.logging import bind_event

logger = logging.getLogger(__name__)


class TelegramSender:
    """ChatSender that routes replies through the gated send_message()."""

    def __init__(self, bot: "TelegramBot") -> None:
        self._bot = bot

    async def send(self, channel: ChatId, text: str) -> None:
        await self._bot.send_message(channel, text)

    def mention(self, user: ChatId) -> str:
        # Replies go to the user's own chat, no mention needed
        return ""


def strip_bot_mention(text: str, username: str | None) -> str:
    """Turn "/ping@MyBot args" into "/ping args" for this bot's username."""
    if not username:
        return text
    head, sep, rest = text.partition(" ")
    suffix = f"@{username}"
    if head.lower().endswith(suffix.lower()):
        head = head[: -len(suffix)]
    return f"{head}{sep}{rest}"


class TelegramBot:
    """Lifecycle component connecting the dispatcher to Telegram.

    The bot stays disabled when TELEGRAM_BOT_TOKEN is missing; the access
    gate still applies to anything that tries to send through it.
    """

    def __init__(
        self,
        token: str,
        gate: AccessGate,
        dispatcher: CommandDispatcher,
    ) -> None:
        self._token = token
        self.gate = gate
        self.dispatcher = dispatcher
        self.sender = TelegramSender(self)
        self._application: Application | None = None

    @property
    def is_running(self) -> bool:
        return self._application is not None

    @property
    def username(self) -> str | None:
        if self._application is None:
            return None
        return self._application.bot.username

    def build_application(self) -> Application:
        """Build the Application with flood control, the gate and handlers.

        AIORateLimiter queues API calls that would exceed Telegram's limits
        and retries once after a RetryAfter, so 429 responses never reach
        the handlers.
        """
        application = (
            Application.builder()
            .token(self._token)
            .rate_limiter(AIORateLimiter(max_retries=1))
            .build()
        )
        application.add_handler(TypeHandler(Update, self.gate_update), group=-1)
        application.add_handler(MessageHandler(filters.TEXT, self.on_text))
        application.add_error_handler(self.on_error)
        return application

    async def start(self) -> None:
        if not self._token:
            logger.error("TELEGRAM_BOT_TOKEN is missing in configuration")
            return

        try:
            application = self.build_application()
            await application.initialize()
            await application.start()
            await application.updater.start_polling()
        except Exception as e:
            logger.error("Failed to initialize Telegram bot: %s", e)
            return

        self._application = application
        logger.info("Telegram Bot started as @%s", application.bot.username)

    async def shutdown(self) -> None:
        application = self._application
        if application is None:
            return

        logger.info("Stopping Telegram Bot...")
        if application.updater is not None and application.updater.running:
            await application.updater.stop()
        if application.running:
            await application.stop()
        await application.shutdown()
        self._application = None

    async def send_message(self, target: ChatId, text: str) -> bool:
        """Send a message to an allowed chat.

        Sends to chats outside the allow-list are blocked and logged as
        errors. Delivery failures are logged too; nothing is raised.

        Args:
            target: Target chat ID.
            text: Message text.

        Returns:
            True if Telegram accepted the message.
        """
        if self._application is None:
            logger.warning("Attempted to send message while bot is not initialized.")
            return False

        try:
            chat_id = int(target)
        except (TypeError, ValueError):
            chat_id = None

        if not self.gate.check_outbound(chat_id):
            return False

        try:
            await self._application.bot.send_message(chat_id=chat_id, text=text)
        except TelegramError as e:
            logger.error("Failed to send message to %s: %s", chat_id, e)
            return False

        logger.debug("Message sent to %s", chat_id)
        return True

    async def gate_update(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Drop updates from senders outside the allow-list."""
        user = update.effective_user
        chat = update.effective_chat
        allowed = self.gate.check_inbound(
            user.id if user else None, chat.id if chat else None
        )
        if not allowed:
            raise ApplicationHandlerStop

    async def on_text(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Log a text message and hand it to the dispatcher."""
        message = update.effective_message
        user = update.effective_user
        chat = update.effective_chat
        if message is None or user is None or chat is None or not message.text:
            return

        bind_event("telegram", update.update_id, chat.id)
        logger.info("[Telegram] %s: %s", user.first_name, message.text)

        text = message.text
        if text.startswith(self.dispatcher.prefix):
            text = strip_bot_mention(text, self.username)

        await self.dispatcher.dispatch(
            ChatMessage(channel=chat.id, user=user.id, text=text),
            self.sender,
        )

    async def on_error(self, update: Any, context: ContextTypes.DEFAULT_TYPE) -> None:
        update_id = getattr(update, "update_id", None)
        logger.error("Error while handling update %s:", update_id)

        error = context.error
        if isinstance(error, NetworkError):
            logger.error("Could not contact Telegram: %s", error)
        elif isinstance(error, TelegramError):
            logger.error("Error in request: %s", error.message)
        else:
            logger.error("Unknown error: %s", error)

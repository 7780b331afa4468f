# tests/test_telegram_bot.py
"""Tests for the Telegram operator surface and its access gate."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram.error import NetworkError, TelegramError
from telegram.ext import AIORateLimiter, ApplicationHandlerStop

from src.core.access import AccessGate
from src.core.commands.builtin import SystemPingCommand
from src.core.commands.dispatcher import CommandDispatcher
from src.core.commands.registry import build_registry
from src.interfaces.telegram.bot import TelegramBot, TelegramSender, strip_bot_mention

AUTHORIZED = 111
STRANGER = 999


def _update(user_id: int | None, chat_id: int | None = None, text: str = "/ping"):
    update = MagicMock()
    update.update_id = 42
    if user_id is None:
        update.effective_user = None
    else:
        update.effective_user.id = user_id
        update.effective_user.first_name = "Ana"
    if chat_id is None and user_id is None:
        update.effective_chat = None
    else:
        update.effective_chat.id = chat_id if chat_id is not None else user_id
    update.effective_message.text = text
    return update


def _running_bot(gate: AccessGate | None = None) -> TelegramBot:
    """TelegramBot with a mocked Application attached."""
    dispatcher = CommandDispatcher(build_registry([SystemPingCommand()]), prefix="/")
    bot = TelegramBot("token", gate or AccessGate({AUTHORIZED}), dispatcher)
    application = MagicMock()
    application.bot.send_message = AsyncMock()
    application.bot.username = "CompanionBot"
    bot._application = application
    return bot


class TestStripBotMention:
    """Tests for /command@BotName normalization."""

    def test_strips_own_username(self) -> None:
        assert strip_bot_mention("/ping@CompanionBot now", "CompanionBot") == "/ping now"

    def test_case_insensitive(self) -> None:
        assert strip_bot_mention("/ping@companionbot", "CompanionBot") == "/ping"

    def test_other_bot_untouched(self) -> None:
        assert strip_bot_mention("/ping@OtherBot", "CompanionBot") == "/ping@OtherBot"

    def test_no_username(self) -> None:
        assert strip_bot_mention("/ping@X", None) == "/ping@X"


class TestInboundGate:
    """Tests for the group -1 gate handler."""

    @pytest.mark.asyncio
    async def test_authorized_update_passes(self) -> None:
        """Test an allow-listed sender continues to the handlers."""
        bot = _running_bot()
        await bot.gate_update(_update(AUTHORIZED), MagicMock())

    @pytest.mark.asyncio
    async def test_unauthorized_update_stopped(self, caplog) -> None:
        """Test a stranger's update stops processing with a warning only."""
        bot = _running_bot()

        with caplog.at_level(logging.WARNING):
            with pytest.raises(ApplicationHandlerStop):
                await bot.gate_update(_update(STRANGER), MagicMock())

        assert "Unauthorized access attempt" in caplog.text
        bot._application.bot.send_message.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_without_user_stopped(self) -> None:
        """Test updates with no sender are dropped."""
        bot = _running_bot()
        with pytest.raises(ApplicationHandlerStop):
            await bot.gate_update(_update(None), MagicMock())

    @pytest.mark.asyncio
    async def test_empty_allow_list_stops_everyone(self) -> None:
        """Test fail-closed gate."""
        bot = _running_bot(AccessGate(set()))
        with pytest.raises(ApplicationHandlerStop):
            await bot.gate_update(_update(AUTHORIZED), MagicMock())


class TestSendMessage:
    """Tests for the gated outbound send."""

    @pytest.mark.asyncio
    async def test_send_to_authorized_chat(self) -> None:
        """Test allowed targets are sent."""
        bot = _running_bot()

        assert await bot.send_message(AUTHORIZED, "oi") is True
        bot._application.bot.send_message.assert_awaited_once_with(
            chat_id=AUTHORIZED, text="oi"
        )

    @pytest.mark.asyncio
    async def test_send_string_chat_id(self) -> None:
        """Test numeric string targets are accepted."""
        bot = _running_bot()
        assert await bot.send_message(str(AUTHORIZED), "oi") is True

    @pytest.mark.asyncio
    async def test_send_to_unauthorized_chat_blocked(self, caplog) -> None:
        """Test non-allowed targets are blocked with an error log."""
        bot = _running_bot()

        with caplog.at_level(logging.ERROR):
            assert await bot.send_message(STRANGER, "oi") is False

        bot._application.bot.send_message.assert_not_called()
        assert "Blocked outgoing message" in caplog.text

    @pytest.mark.asyncio
    async def test_send_invalid_target_blocked(self) -> None:
        """Test non-numeric targets never reach Telegram."""
        bot = _running_bot()
        assert await bot.send_message("abc", "oi") is False
        bot._application.bot.send_message.assert_not_called()

    @pytest.mark.asyncio
    async def test_send_without_application(self) -> None:
        """Test sending before start() is a logged no-op."""
        dispatcher = CommandDispatcher(build_registry([]), prefix="/")
        bot = TelegramBot("", AccessGate({AUTHORIZED}), dispatcher)
        assert await bot.send_message(AUTHORIZED, "oi") is False

    @pytest.mark.asyncio
    async def test_send_failure_returns_false(self) -> None:
        """Test Telegram errors are logged, not raised."""
        bot = _running_bot()
        bot._application.bot.send_message.side_effect = TelegramError("chat not found")

        assert await bot.send_message(AUTHORIZED, "oi") is False

    @pytest.mark.asyncio
    async def test_sender_routes_through_gate(self) -> None:
        """Test TelegramSender uses the gated send."""
        bot = _running_bot()
        sender = TelegramSender(bot)

        await sender.send(STRANGER, "oi")
        await sender.send(AUTHORIZED, "oi")

        bot._application.bot.send_message.assert_awaited_once()
        assert sender.mention(AUTHORIZED) == ""


class TestOnText:
    """Tests for text message handling."""

    @pytest.mark.asyncio
    async def test_ping_command_replies(self) -> None:
        """Test /ping from an allowed user gets the system reply."""
        bot = _running_bot()

        await bot.on_text(_update(AUTHORIZED, text="/ping"), MagicMock())

        bot._application.bot.send_message.assert_awaited_once_with(
            chat_id=AUTHORIZED, text="Pong! 🏓 (System Operational)"
        )

    @pytest.mark.asyncio
    async def test_ping_with_bot_suffix(self) -> None:
        """Test /ping@BotName in groups is recognised."""
        bot = _running_bot()

        await bot.on_text(_update(AUTHORIZED, text="/ping@CompanionBot"), MagicMock())

        bot._application.bot.send_message.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_plain_text_logged_not_answered(self, caplog) -> None:
        """Test plain text is logged and nothing is sent."""
        bot = _running_bot()

        with caplog.at_level(logging.INFO):
            await bot.on_text(_update(AUTHORIZED, text="bom dia"), MagicMock())

        assert "[Telegram] Ana: bom dia" in caplog.text
        bot._application.bot.send_message.assert_not_called()


class TestLifecycle:
    """Tests for Telegram start/stop."""

    @pytest.mark.asyncio
    async def test_start_without_token_disabled(self, caplog) -> None:
        """Test a missing token disables the bot without raising."""
        dispatcher = CommandDispatcher(build_registry([]), prefix="/")
        bot = TelegramBot("", AccessGate({AUTHORIZED}), dispatcher)

        with caplog.at_level(logging.ERROR):
            await bot.start()

        assert bot.is_running is False
        assert "TELEGRAM_BOT_TOKEN is missing" in caplog.text
        await bot.shutdown()

    @pytest.mark.asyncio
    async def test_start_and_shutdown(self, monkeypatch) -> None:
        """Test start() initializes, starts and polls; shutdown() reverses it."""
        application = MagicMock()
        application.initialize = AsyncMock()
        application.start = AsyncMock()
        application.stop = AsyncMock()
        application.shutdown = AsyncMock()
        application.updater.start_polling = AsyncMock()
        application.updater.stop = AsyncMock()
        application.updater.running = True
        application.running = True
        application.bot.username = "CompanionBot"

        dispatcher = CommandDispatcher(build_registry([]), prefix="/")
        bot = TelegramBot("token", AccessGate({AUTHORIZED}), dispatcher)
        monkeypatch.setattr(bot, "build_application", lambda: application)

        await bot.start()
        assert bot.is_running is True
        assert bot.username == "CompanionBot"
        application.updater.start_polling.assert_awaited_once()

        await bot.shutdown()
        application.updater.stop.assert_awaited_once()
        application.stop.assert_awaited_once()
        application.shutdown.assert_awaited_once()
        assert bot.is_running is False

    @pytest.mark.asyncio
    async def test_start_failure_logged(self, monkeypatch, caplog) -> None:
        """Test initialization errors leave the bot disabled."""
        application = MagicMock()
        application.initialize = AsyncMock(side_effect=NetworkError("offline"))

        dispatcher = CommandDispatcher(build_registry([]), prefix="/")
        bot = TelegramBot("token", AccessGate({AUTHORIZED}), dispatcher)
        monkeypatch.setattr(bot, "build_application", lambda: application)

        with caplog.at_level(logging.ERROR):
            await bot.start()

        assert bot.is_running is False
        assert "Failed to initialize Telegram bot" in caplog.text

    def test_build_application_registers_handlers(self) -> None:
        """Test the real Application gets the gate in group -1."""
        dispatcher = CommandDispatcher(build_registry([]), prefix="/")
        bot = TelegramBot("123456:ABC-test", AccessGate({AUTHORIZED}), dispatcher)

        application = bot.build_application()

        assert -1 in application.handlers
        assert 0 in application.handlers
        assert application.error_handlers

    @pytest.mark.asyncio
    async def test_error_handler_classifies(self, caplog) -> None:
        """Test the error handler logs network errors distinctly."""
        bot = _running_bot()
        context = MagicMock()
        context.error = NetworkError("timeout")

        with caplog.at_level(logging.ERROR):
            await bot.on_error(_update(AUTHORIZED), context)

        assert "Could not contact Telegram" in caplog.text

    def test_build_application_attaches_rate_limiter(self) -> None:
        """Test API calls go through the flood-control rate limiter."""
        dispatcher = CommandDispatcher(build_registry([]), prefix="/")
        bot = TelegramBot("123456:ABC-test", AccessGate({AUTHORIZED}), dispatcher)

        application = bot.build_application()

        assert isinstance(application.bot.rate_limiter, AIORateLimiter)


class TestGroupChats:
    """Tests for commands sent from group chats."""

    GROUP = -100500

    @pytest.mark.asyncio
    async def test_reply_to_unlisted_group_blocked(self, caplog) -> None:
        """Test an allowed user's group command gets no reply to the group."""
        bot = _running_bot()

        with caplog.at_level(logging.ERROR):
            await bot.on_text(
                _update(AUTHORIZED, chat_id=self.GROUP, text="/ping@CompanionBot"),
                MagicMock(),
            )

        bot._application.bot.send_message.assert_not_called()
        assert f"Blocked outgoing message to unauthorized ChatID: {self.GROUP}" in (
            caplog.text
        )

    @pytest.mark.asyncio
    async def test_reply_to_listed_group_sent(self) -> None:
        """Test listing the group ID enables replies there."""
        bot = _running_bot(AccessGate({AUTHORIZED, self.GROUP}))

        await bot.on_text(
            _update(AUTHORIZED, chat_id=self.GROUP, text="/ping@CompanionBot"),
            MagicMock(),
        )

        bot._application.bot.send_message.assert_awaited_once_with(
            chat_id=self.GROUP, text="Pong! 🏓 (System Operational)"
        )

    @pytest.mark.asyncio
    async def test_group_member_not_on_list_stopped(self) -> None:
        """Test listing a group does not admit its other members."""
        bot = _running_bot(AccessGate({AUTHORIZED, self.GROUP}))

        with pytest.raises(ApplicationHandlerStop):
            await bot.gate_update(_update(STRANGER, chat_id=self.GROUP), MagicMock())

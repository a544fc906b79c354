from __future__ import annotations

import logging

import telebot
from telebot.apihelper import ApiTelegramException

from application.services import AuthService, LoginResult, OperationResult, RegisterResult, SessionHandle
from interfaces.common import HELP_TEXT, render_account, render_error, render_result, run_guarded
from interfaces.telegram.commands import parse_login_args, parse_register_args

logger = logging.getLogger(__name__)


def _build_session_handle(message) -> SessionHandle:
    """Extract a channel-agnostic session handle from a Telegram message."""

    return SessionHandle(provider="telegram", client_id=str(message.from_user.id))


def create_telegram_bot(bot_token: str, auth_service: AuthService) -> telebot.TeleBot:
    """
    Configure and return a TeleBot instance wired to the application layer.

    This module contains only Telegram-specific concerns: parsing Telegram
    messages and mapping them to/from `AuthService` calls.
    """

    bot = telebot.TeleBot(bot_token)

    def _forget_message(message) -> None:
        # Commands carrying a password should not linger in the chat history.
        try:
            bot.delete_message(message.chat.id, message.message_id)
        except ApiTelegramException as exc:
            logger.warning("Could not delete credential message in chat %s: %s", message.chat.id, exc)

    @bot.message_handler(commands=["start", "hello"])
    def handle_start(message):
        bot.send_message(
            message.chat.id,
            "Welcome to the user center bot!\n"
            "Use /register to create an account and /login to sign in.\n"
            "Type /help to see available commands.",
        )

    @bot.message_handler(commands=["help"])
    def handle_help(message):
        bot.send_message(message.chat.id, HELP_TEXT.format(p="/"))

    @bot.message_handler(commands=["register"])
    def handle_register(message):
        try:
            account_name, password, confirm_password, planet_code = parse_register_args(message.text)
        except ValueError as exc:
            _forget_message(message)
            bot.send_message(message.chat.id, str(exc))
            return

        result = run_guarded(
            lambda: auth_service.register(account_name, password, confirm_password, planet_code),
            RegisterResult,
        )
        _forget_message(message)
        bot.send_message(
            message.chat.id,
            render_result(result, f"✅ Registered account {account_name} (id {result.account_id})."),
        )

    @bot.message_handler(commands=["login"])
    def handle_login(message):
        try:
            account_name, password = parse_login_args(message.text)
        except ValueError as exc:
            _forget_message(message)
            bot.send_message(message.chat.id, str(exc))
            return

        session = _build_session_handle(message)
        result = run_guarded(
            lambda: auth_service.login(account_name, password, session),
            LoginResult,
        )
        _forget_message(message)

        if not result.success:
            bot.send_message(message.chat.id, render_error(result.error))
            return

        bot.send_message(message.chat.id, "✅ Logged in.\n" + render_account(result.account))

    @bot.message_handler(commands=["logout"])
    def handle_logout(message):
        session = _build_session_handle(message)
        result = run_guarded(lambda: auth_service.logout(session), OperationResult)
        bot.send_message(message.chat.id, render_result(result, "👋 Logged out."))

    @bot.message_handler(commands=["whoami"])
    def handle_whoami(message):
        session = _build_session_handle(message)
        result = run_guarded(lambda: auth_service.current_account(session), LoginResult)
        if not result.success:
            bot.send_message(message.chat.id, render_error(result.error))
            return

        bot.send_message(message.chat.id, render_account(result.account))

    return bot

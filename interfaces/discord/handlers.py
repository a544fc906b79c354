from __future__ import annotations

import logging

import discord
from discord.ext import commands

from application.services import AuthService, LoginResult, OperationResult, RegisterResult, SessionHandle
from domain.errors import AuthError
from interfaces.common import CREDENTIAL_COMMANDS, HELP_TEXT, render_account, render_error, render_result, run_guarded

logger = logging.getLogger(__name__)


def _build_session_handle(user: discord.abc.User) -> SessionHandle:
    """Create a `SessionHandle` from a Discord user."""

    return SessionHandle(provider="discord", client_id=str(user.id))


def create_discord_bot(auth_service: AuthService) -> commands.Bot:
    """
    Configure and return a Discord bot with behaviour analogous to
    the Telegram interface: !register, !login, !logout, !whoami.
    """

    intents = discord.Intents.default()
    intents.message_content = True

    # Disable the default help command so we can provide our own `!help`.
    bot = commands.Bot(command_prefix="!", intents=intents, help_command=None)

    async def _forget_message(ctx: commands.Context) -> None:
        # Bots cannot delete other users' messages in DMs; that is fine.
        try:
            await ctx.message.delete()
        except discord.HTTPException as exc:
            logger.warning("Could not delete credential message %s: %s", ctx.message.id, exc)

    @bot.event
    async def on_ready():
        logger.info("Discord bot logged in as %s (id=%s)", bot.user, bot.user.id)

    @bot.command(name="start")
    async def start_cmd(ctx: commands.Context):
        await ctx.send(
            "Welcome to the user center bot (Discord)!\n"
            "Use !register to create an account and !login to sign in.\n"
            "Type !help to see available commands."
        )

    @bot.command(name="help")
    async def help_cmd(ctx: commands.Context):
        await ctx.send(HELP_TEXT.format(p="!"))

    @bot.command(name="register")
    async def register_cmd(
        ctx: commands.Context,
        account_name: str,
        password: str,
        confirm_password: str,
        planet_code: str,
    ):
        result = run_guarded(
            lambda: auth_service.register(account_name, password, confirm_password, planet_code),
            RegisterResult,
        )
        await _forget_message(ctx)
        await ctx.send(
            render_result(result, f"✅ Registered account {account_name} (id {result.account_id}).")
        )

    @bot.command(name="login")
    async def login_cmd(ctx: commands.Context, account_name: str, password: str):
        session = _build_session_handle(ctx.author)
        result = run_guarded(
            lambda: auth_service.login(account_name, password, session),
            LoginResult,
        )
        await _forget_message(ctx)

        if not result.success:
            await ctx.send(render_error(result.error))
            return

        await ctx.send("✅ Logged in.\n" + render_account(result.account))

    @bot.command(name="logout")
    async def logout_cmd(ctx: commands.Context):
        session = _build_session_handle(ctx.author)
        result = run_guarded(lambda: auth_service.logout(session), OperationResult)
        await ctx.send(render_result(result, "👋 Logged out."))

    @bot.command(name="whoami")
    async def whoami_cmd(ctx: commands.Context):
        session = _build_session_handle(ctx.author)
        result = run_guarded(lambda: auth_service.current_account(session), LoginResult)
        if not result.success:
            await ctx.send(render_error(result.error))
            return

        await ctx.send(render_account(result.account))

    @bot.event
    async def on_command_error(ctx: commands.Context, error: commands.CommandError):
        if isinstance(error, commands.MissingRequiredArgument):
            if ctx.command is not None and ctx.command.name in CREDENTIAL_COMMANDS:
                await _forget_message(ctx)
            await ctx.send(f"Missing argument: {error.param.name}. Type !help for usage.")
            return
        if isinstance(error, commands.CommandNotFound):
            return
        logger.error("Command %s failed: %s", ctx.command, error)
        await ctx.send(render_error(AuthError.system_error()))

    return bot

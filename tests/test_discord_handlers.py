import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from discord.ext import commands

from interfaces.discord.handlers import create_discord_bot


def _make_ctx(command_name: str) -> SimpleNamespace:
    return SimpleNamespace(
        command=SimpleNamespace(name=command_name),
        message=SimpleNamespace(id=1, delete=AsyncMock()),
        send=AsyncMock(),
    )


def _missing(param_name: str) -> commands.MissingRequiredArgument:
    return commands.MissingRequiredArgument(SimpleNamespace(name=param_name, displayed_name=None))


class DiscordCommandErrorTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.bot = create_discord_bot(MagicMock())

    async def test_incomplete_login_message_is_deleted(self):
        ctx = _make_ctx("login")
        await self.bot.on_command_error(ctx, _missing("password"))

        ctx.message.delete.assert_awaited_once()
        ctx.send.assert_awaited_once()
        self.assertIn("password", ctx.send.await_args.args[0])

    async def test_incomplete_register_message_is_deleted(self):
        ctx = _make_ctx("register")
        await self.bot.on_command_error(ctx, _missing("planet_code"))

        ctx.message.delete.assert_awaited_once()

    async def test_other_commands_keep_their_message(self):
        ctx = _make_ctx("whoami")
        await self.bot.on_command_error(ctx, _missing("anything"))

        ctx.message.delete.assert_not_awaited()
        ctx.send.assert_awaited_once()


if __name__ == "__main__":
    unittest.main()

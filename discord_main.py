from interfaces.discord.handlers import create_discord_bot
from settings import Settings, build_auth_service, configure_logging


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    if not settings.discord_token:
        raise RuntimeError("DISCORD_TOKEN environment variable is not set.")

    auth_service = build_auth_service(settings)

    bot = create_discord_bot(auth_service)
    # Logging is already configured above; keep discord.py from adding its own handler.
    bot.run(settings.discord_token, log_handler=None)


if __name__ == "__main__":
    main()

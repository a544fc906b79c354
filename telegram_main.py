import logging

from interfaces.telegram.handlers import create_telegram_bot
from settings import Settings, build_auth_service, configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    if not settings.telegram_token:
        raise RuntimeError("TELEGRAM_TOKEN environment variable is not set.")

    auth_service = build_auth_service(settings)

    bot = create_telegram_bot(settings.telegram_token, auth_service)
    logger.info("Telegram bot polling started")
    bot.infinity_polling()


if __name__ == "__main__":
    main()

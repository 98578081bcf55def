#!/usr/bin/env python3
"""
Arranca el bot con el módulo de ayuda usando long polling
"""
import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from pydantic import ValidationError

from database.setup import get_engine
from helpmenu.config import HelpMenuSettings
from helpmenu.module import HelpModule
from utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def run_bot(settings: HelpMenuSettings) -> None:
    engine = get_engine(settings.database_url)
    bot = Bot(token=settings.bot_token)
    dispatcher = Dispatcher()

    help_module = HelpModule(
        engine,
        idle_timeout=settings.idle_timeout,
        catalogue_path=settings.catalogue_path,
    )
    help_module.register(dispatcher)

    try:
        await dispatcher.start_polling(bot)
    finally:
        await bot.session.close()
        await engine.dispose()


def main() -> int:
    try:
        settings = HelpMenuSettings.from_env()
    except ValidationError as e:
        print(f"❌ Configuración inválida: {e}", file=sys.stderr)
        return 1

    setup_logging(settings.log_level, settings.log_dir)

    valid, error = settings.validate_settings()
    if not valid:
        logger.error(error)
        return 1

    asyncio.run(run_bot(settings))
    return 0


if __name__ == "__main__":
    sys.exit(main())

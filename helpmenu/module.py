"""
Módulo de ayuda para el bot
Menú paginado con borrado automático por inactividad
"""
import logging
from pathlib import Path
from typing import Optional

from aiogram import Bot, Dispatcher
from sqlalchemy.ext.asyncio import AsyncEngine

from database.user_menu_state import MenuStateStore
from handlers.help_handler import router as help_router
from utils.menu_manager import MenuManager, RecoveryReport
from utils.text_utils import apply_font, register_module
from .catalogue import HelpCatalogue
from .constants import IDLE_TIMEOUT_SECONDS, MODULE_NAME, MODULE_VERSION
from .views import MenuViewBuilder, TextTransform

logger = logging.getLogger(__name__)


class HelpModule:
    """Agrupa catálogo, vistas, almacenamiento y gestor de menús de un proceso"""

    name = MODULE_NAME
    version = MODULE_VERSION

    def __init__(
        self,
        engine: AsyncEngine,
        idle_timeout: float = IDLE_TIMEOUT_SECONDS,
        catalogue: Optional[HelpCatalogue] = None,
        catalogue_path: Optional[Path] = None,
        transform: TextTransform = apply_font
    ):
        register_module(self.name)
        self.catalogue = catalogue or HelpCatalogue(catalogue_path)
        self.views = MenuViewBuilder(self.catalogue.modules, transform=transform, module_context=self.name)
        self.store = MenuStateStore(engine)
        self.menu_manager = MenuManager(self.store, idle_timeout=idle_timeout)
        self.router = help_router

    def register(self, dispatcher: Dispatcher) -> None:
        """Incluye el router y los hooks de arranque/parada en el dispatcher"""
        dispatcher["menu_manager"] = self.menu_manager
        dispatcher["help_views"] = self.views
        dispatcher["help_catalogue"] = self.catalogue
        dispatcher.include_router(self.router)
        dispatcher.startup.register(self.on_start)
        dispatcher.shutdown.register(self.on_stop)

    async def on_start(self, bot: Bot) -> RecoveryReport:
        """Crea el esquema y recupera los menús que sobrevivieron al reinicio"""
        report = await self.menu_manager.start(bot)
        logger.info(f"{self.name} module {self.version} initialized.")
        return report

    async def on_stop(self) -> None:
        logger.info(f"{self.name} module shutting down. Clearing timers.")
        self.menu_manager.shutdown()

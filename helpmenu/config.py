"""
Configuración del bot de ayuda a partir de variables de entorno
"""
import os
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, Field

from database.setup import DEFAULT_DATABASE_URL
from .constants import IDLE_TIMEOUT_SECONDS


class HelpMenuSettings(BaseModel):
    """Ajustes del proceso; todos tienen valor por defecto salvo el token"""
    bot_token: str = ""
    database_url: str = DEFAULT_DATABASE_URL
    idle_timeout: float = Field(default=IDLE_TIMEOUT_SECONDS, gt=0)
    log_level: str = "INFO"
    log_dir: Optional[Path] = Path("logs")
    catalogue_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "HelpMenuSettings":
        """
        Lee BOT_TOKEN, DATABASE_URL, HELP_IDLE_TIMEOUT, LOG_LEVEL, LOG_DIR y
        HELP_CATALOGUE_PATH. Las variables vacías usan el valor por defecto.
        Lanza ValidationError si algún valor no es válido.
        """
        env = {
            "bot_token": os.getenv("BOT_TOKEN", ""),
            "database_url": os.getenv("DATABASE_URL"),
            "idle_timeout": os.getenv("HELP_IDLE_TIMEOUT"),
            "log_level": os.getenv("LOG_LEVEL"),
            "log_dir": os.getenv("LOG_DIR"),
            "catalogue_path": os.getenv("HELP_CATALOGUE_PATH"),
        }
        return cls(**{key: value for key, value in env.items() if value})

    def validate_settings(self) -> Tuple[bool, Optional[str]]:
        """
        Returns: (es_valida, mensaje_de_error)
        """
        if not self.bot_token:
            return False, "BOT_TOKEN is required"
        scheme = self.database_url.split("://", 1)[0]
        if not scheme.startswith("sqlite+"):
            return False, "DATABASE_URL must use an async SQLite driver (e.g. sqlite+aiosqlite://)"
        return True, None

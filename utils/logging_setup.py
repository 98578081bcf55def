"""
Configuración de logging del bot: consola + fichero.
"""
import logging
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILENAME = "help_menu.log"


def setup_logging(level: str = "INFO", log_dir: Optional[Union[str, Path]] = None) -> None:
    """Configura el logger raíz. Sin `log_dir` solo se registra en consola."""
    handlers = [logging.StreamHandler()]
    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path / LOG_FILENAME, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    # aiogram es muy verboso en DEBUG
    logging.getLogger("aiogram.event").setLevel(logging.WARNING)

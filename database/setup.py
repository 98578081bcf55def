# database/setup.py
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from .base_models import Base

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///help_menus.db"


def get_engine(database_url: str = DEFAULT_DATABASE_URL, echo: bool = False) -> AsyncEngine:
  """
  Crea el motor asíncrono de base de datos.
  """
  return create_async_engine(database_url, echo=echo)


async def init_db(engine: AsyncEngine) -> AsyncEngine:
  """
  Crea las tablas si no existen. Se puede llamar en cada arranque.
  """
  async with engine.begin() as conn:
    await conn.run_sync(Base.metadata.create_all)
  logger.info(f"Tablas verificadas: {sorted(Base.metadata.tables)}")
  return engine

# database/user_menu_state.py
import logging
from typing import List

from sqlalchemy import select, delete
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from database.base_models import HelpMenuState
from database.setup import init_db

logger = logging.getLogger(__name__)


class MenuStateStore:
  """
  Persistencia de los menús de ayuda abiertos, una fila por usuario.
  Cada escritura se confirma en su propia transacción.
  """

  def __init__(self, engine: AsyncEngine):
    self.engine = engine
    self.session_factory = async_sessionmaker(engine, expire_on_commit=False)

  async def create_schema(self) -> None:
    await init_db(self.engine)

  async def upsert(self, user_id: int, chat_id: int, message_id: int, timestamp: float) -> bool:
    """
    Crea o reemplaza el estado de menú del usuario en una sola sentencia
    (INSERT ... ON CONFLICT DO UPDATE), atómica frente a escrituras concurrentes.
    """
    values = {
      "chat_id": chat_id,
      "message_id": message_id,
      "last_activity_timestamp": timestamp,
    }
    statement = sqlite_insert(HelpMenuState).values(user_id=user_id, **values)
    statement = statement.on_conflict_do_update(index_elements=[HelpMenuState.user_id], set_=values)
    try:
      async with self.session_factory() as session:
        await session.execute(statement)
        await session.commit()
    except SQLAlchemyError as e:
      logger.error(f"Failed to save help menu state for user {user_id}: {e}")
      return False
    return True

  async def delete(self, user_id: int) -> bool:
    """
    Elimina el estado de menú del usuario (no falla si no existe).
    """
    try:
      async with self.session_factory() as session:
        await session.execute(delete(HelpMenuState).where(HelpMenuState.user_id == user_id))
        await session.commit()
    except SQLAlchemyError as e:
      logger.error(f"Failed to delete help menu state for user {user_id}: {e}")
      return False
    return True

  async def load_all(self) -> List[HelpMenuState]:
    try:
      async with self.session_factory() as session:
        result = await session.execute(select(HelpMenuState).order_by(HelpMenuState.user_id))
        return list(result.scalars().all())
    except SQLAlchemyError as e:
      logger.error(f"Failed to load help menu states: {e}")
      return []

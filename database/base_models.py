# database/base_models.py
from sqlalchemy import (
  Column,
  BigInteger,
  Float,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# --- MODELOS BASE ---

class HelpMenuState(Base):
  """Menú de ayuda abierto de un usuario (como mucho uno por usuario)"""
  __tablename__ = "help_menus"
  user_id = Column(BigInteger, primary_key=True, autoincrement=False)
  chat_id = Column(BigInteger, nullable=False)
  message_id = Column(BigInteger, nullable=False)
  # Segundos epoch de la última interacción (abrir o navegar)
  last_activity_timestamp = Column(Float, nullable=False)

  def __repr__(self) -> str:
    return (
      f"<HelpMenuState user={self.user_id} chat={self.chat_id} "
      f"message={self.message_id} last={self.last_activity_timestamp}>"
    )

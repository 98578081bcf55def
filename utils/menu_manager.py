"""
Gestión del ciclo de vida de los menús de ayuda.
Un menú abierto por usuario, con un temporizador de inactividad que lo borra.
El estado se guarda en base de datos para recuperarlo tras un reinicio.
"""
import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Set

from aiogram import Bot
from sqlalchemy.exc import SQLAlchemyError

from database.user_menu_state import MenuStateStore
from helpmenu.constants import IDLE_TIMEOUT_SECONDS
from utils.message_safety import DeleteResult, safe_delete_message
from utils.scheduler import ScheduledCall

logger = logging.getLogger(__name__)


@dataclass
class MenuRecord:
    """Menú abierto de un usuario (solo en memoria)"""
    user_id: int
    chat_id: int
    message_id: int
    last_activity: float
    timer: Optional[ScheduledCall] = field(default=None, repr=False, compare=False)

    def same_message(self, chat_id: int, message_id: int) -> bool:
        return self.chat_id == chat_id and self.message_id == message_id


@dataclass
class RecoveryReport:
    restored: int = 0
    expired: int = 0


class MenuManager:
    """Dueño único de la tabla de menús abiertos y de sus temporizadores"""

    def __init__(
        self,
        store: MenuStateStore,
        idle_timeout: float = IDLE_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.time
    ):
        self.store = store
        self.idle_timeout = idle_timeout
        self.clock = clock
        self.bot: Optional[Bot] = None
        self._menus: Dict[int, MenuRecord] = {}
        # Serializa las escrituras de cada usuario
        self._row_locks: Dict[int, asyncio.Lock] = {}
        # Temporizadores vivos, incluidas las caducidades ya en curso
        self._timers: Set[ScheduledCall] = set()

    def __len__(self) -> int:
        return len(self._menus)

    def __contains__(self, user_id: int) -> bool:
        return user_id in self._menus

    def get(self, user_id: int) -> Optional[MenuRecord]:
        return self._menus.get(user_id)

    async def start(self, bot: Bot) -> RecoveryReport:
        """Crea el esquema si hace falta y recupera los menús guardados"""
        self.bot = bot
        try:
            await self.store.create_schema()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Could not create help menu schema, skipping recovery: {e}")
            return RecoveryReport()
        return await self.recover()

    async def open_menu(self, user_id: int, chat_id: int, message_id: int) -> MenuRecord:
        """
        Registra un menú nuevo (o refresca el actual) y rearma su temporizador.
        Cualquier temporizador anterior del usuario se cancela primero.
        """
        self._cancel_timer(user_id)
        now = self.clock()
        record = MenuRecord(user_id, chat_id, message_id, now)
        record.timer = self._arm(record, self.idle_timeout)
        self._menus[user_id] = record

        # Si la escritura falla el proceso sigue con el estado en memoria
        await self._sync_row(user_id)
        return record

    async def refresh_menu(self, user_id: int, chat_id: int, message_id: int) -> MenuRecord:
        """Navegación dentro del mismo mensaje: misma identidad, temporizador nuevo"""
        return await self.open_menu(user_id, chat_id, message_id)

    async def close_menu(self, user_id: int, chat_id: int, message_id: int) -> DeleteResult:
        """
        Cierre pedido por el usuario. El estado se purga aunque el borrado falle.
        """
        self._cancel_timer(user_id)
        self._menus.pop(user_id, None)

        result = await self._delete_message(chat_id, message_id)
        if result.ok:
            logger.info(f"Help menu for user {user_id} in chat {chat_id} deleted by user request.")
        else:
            logger.error(f"Failed to delete help menu on user request for user {user_id}")

        await self._sync_row(user_id)
        return result

    async def recover(self) -> RecoveryReport:
        """
        Reconciliación al arrancar: borra los menús ya caducados y rearma el
        temporizador de los demás con el tiempo restante.
        """
        report = RecoveryReport()
        rows = await self.store.load_all()
        now = self.clock()

        for row in rows:
            elapsed = now - row.last_activity_timestamp
            if elapsed >= self.idle_timeout:
                result = await self._delete_message(row.chat_id, row.message_id)
                if result.ok:
                    logger.info(
                        f"Help menu for user {row.user_id} in chat {row.chat_id} "
                        "deleted on startup (already idle)."
                    )
                await self.store.delete(row.user_id)
                report.expired += 1
                continue

            record = MenuRecord(row.user_id, row.chat_id, row.message_id, row.last_activity_timestamp)
            record.timer = self._arm(record, self.idle_timeout - elapsed)
            self._menus[row.user_id] = record
            report.restored += 1

        logger.info(f"Help menu recovery: {report.restored} restored, {report.expired} expired")
        return report

    def shutdown(self) -> None:
        """
        Cancela todos los temporizadores, también las caducidades a medio
        ejecutar. No hace I/O: todo ya está guardado.
        """
        for timer in list(self._timers):
            timer.cancel()
        self._menus.clear()

    # Métodos privados auxiliares

    def _arm(self, record: MenuRecord, delay: float) -> ScheduledCall:
        user_id, chat_id, message_id = record.user_id, record.chat_id, record.message_id

        async def expire() -> None:
            await self._expire(user_id, chat_id, message_id)

        timer = ScheduledCall(delay, expire, name=f"help_menu_expiry_{user_id}")
        self._timers.add(timer)
        timer.add_done_callback(self._timers.discard)
        return timer

    def _cancel_timer(self, user_id: int) -> None:
        record = self._menus.get(user_id)
        if record and record.timer:
            record.timer.cancel()

    async def _expire(self, user_id: int, chat_id: int, message_id: int) -> None:
        record = self._menus.get(user_id)
        if not record or not record.same_message(chat_id, message_id):
            # Menú reemplazado por otro más reciente
            return

        self._menus.pop(user_id, None)
        result = await self._delete_message(chat_id, message_id)
        if result.ok:
            logger.info(f"Help menu for user {user_id} in chat {chat_id} deleted due to idle timeout.")
        await self._sync_row(user_id)

    async def _sync_row(self, user_id: int) -> None:
        """
        Lleva la fila del usuario al estado que hay en memoria en ese momento.
        Con el lock por usuario la última escritura siempre refleja la última transición.
        """
        lock = self._row_locks.setdefault(user_id, asyncio.Lock())
        async with lock:
            record = self._menus.get(user_id)
            if record is None:
                await self.store.delete(user_id)
            else:
                await self.store.upsert(user_id, record.chat_id, record.message_id, record.last_activity)

    async def _delete_message(self, chat_id: int, message_id: int) -> DeleteResult:
        if self.bot is None:
            logger.error(f"No bot available to delete message {message_id} in chat {chat_id}")
            return DeleteResult.FAILED
        return await safe_delete_message(self.bot, chat_id, message_id)

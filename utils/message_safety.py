"""
Envoltorios seguros sobre la API de Telegram.
Clasifican los fallos en resultados explícitos en lugar de propagar excepciones.
"""
import enum
import logging
from typing import Optional

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError, TelegramBadRequest
from aiogram.types import InlineKeyboardMarkup, Message

logger = logging.getLogger(__name__)

PARSE_MODE = "Markdown"

_NOT_FOUND_MARKERS = (
    "message to delete not found",
    "message not found",
)
_NOT_MODIFIED_MARKER = "message is not modified"


class DeleteResult(enum.Enum):
    """Resultado de borrar un mensaje"""
    DELETED = "deleted"
    ALREADY_ABSENT = "already_absent"
    FAILED = "failed"

    @property
    def ok(self) -> bool:
        return self is not DeleteResult.FAILED


class EditResult(enum.Enum):
    """Resultado de editar un mensaje"""
    EDITED = "edited"
    NOT_MODIFIED = "not_modified"
    FAILED = "failed"


def _error_text(exc: TelegramAPIError) -> str:
    return (getattr(exc, "message", None) or str(exc)).lower()


async def safe_send_message(
    bot: Bot,
    chat_id: int,
    text: str,
    reply_markup: Optional[InlineKeyboardMarkup] = None
) -> Optional[Message]:
    """Envía un mensaje; devuelve None si Telegram lo rechaza"""
    try:
        return await bot.send_message(
            chat_id,
            text,
            parse_mode=PARSE_MODE,
            reply_markup=reply_markup,
        )
    except TelegramAPIError as e:
        logger.error(f"Failed to send message to chat {chat_id}: {e}")
        return None


async def safe_edit_message_text(
    bot: Bot,
    chat_id: int,
    message_id: int,
    text: str,
    reply_markup: Optional[InlineKeyboardMarkup] = None
) -> EditResult:
    """
    Edita el texto y teclado de un mensaje.
    Returns: EDITED, NOT_MODIFIED (contenido idéntico) o FAILED
    """
    try:
        await bot.edit_message_text(
            text=text,
            chat_id=chat_id,
            message_id=message_id,
            parse_mode=PARSE_MODE,
            reply_markup=reply_markup,
        )
    except TelegramBadRequest as e:
        if _NOT_MODIFIED_MARKER in _error_text(e):
            return EditResult.NOT_MODIFIED
        logger.error(f"Failed to edit message {message_id} in chat {chat_id}: {e}")
        return EditResult.FAILED
    except TelegramAPIError as e:
        logger.error(f"Failed to edit message {message_id} in chat {chat_id}: {e}")
        return EditResult.FAILED
    return EditResult.EDITED


async def safe_delete_message(bot: Bot, chat_id: int, message_id: int) -> DeleteResult:
    """
    Borra un mensaje.
    Returns: DELETED, ALREADY_ABSENT (ya no existe) o FAILED
    """
    try:
        await bot.delete_message(chat_id, message_id)
    except TelegramBadRequest as e:
        error_text = _error_text(e)
        if any(marker in error_text for marker in _NOT_FOUND_MARKERS):
            return DeleteResult.ALREADY_ABSENT
        logger.error(f"Failed to delete message {message_id} in chat {chat_id}: {e}")
        return DeleteResult.FAILED
    except TelegramAPIError as e:
        logger.error(f"Failed to delete message {message_id} in chat {chat_id}: {e}")
        return DeleteResult.FAILED
    return DeleteResult.DELETED


async def safe_answer_callback(bot: Bot, callback_query_id: str) -> bool:
    """Confirma un callback sin alerta. Un fallo aquí nunca detiene la acción."""
    try:
        await bot.answer_callback_query(callback_query_id)
    except TelegramAPIError as e:
        logger.warning(f"Failed to answer callback {callback_query_id}: {e}")
        return False
    return True

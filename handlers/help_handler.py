"""
Handlers del menú de ayuda: comandos de texto y botones del menú
"""
import logging

from aiogram import Bot, F, Router
from aiogram.dispatcher.event.bases import SkipHandler
from aiogram.enums import ChatType
from aiogram.types import CallbackQuery, Message

from helpmenu.callbacks import parse_callback_data, parse_page
from helpmenu.catalogue import HelpCatalogue
from helpmenu.constants import (
    ACTION_DELETE,
    ACTION_MAIN,
    ACTION_NOOP,
    ACTION_SHOW,
    CALLBACK_PREFIX,
    GENERIC_HELP_COMMAND,
    HELP_COMMAND_PREFIX,
    HELP_COMMAND_SUFFIX,
    MENU_COMMAND,
    MESSAGE_TEMPLATES,
)
from helpmenu.views import MenuView, MenuViewBuilder
from utils.menu_manager import MenuManager
from utils.message_safety import (
    EditResult,
    safe_answer_callback,
    safe_edit_message_text,
    safe_send_message,
)

logger = logging.getLogger(__name__)
router = Router(name="help_handler")


async def handle_text_message(
    message: Message,
    bot: Bot,
    menu_manager: MenuManager,
    help_views: MenuViewBuilder,
    help_catalogue: HelpCatalogue
) -> bool:
    """
    Procesa `.menu` y `/<modulo>help`.
    Returns: True si el mensaje era para este módulo
    """
    text = (message.text or "").strip()
    if not text or message.from_user is None:
        return False

    command = text.split()[0].lower()
    chat_id = message.chat.id

    if command == MENU_COMMAND:
        if message.chat.type != ChatType.PRIVATE:
            await safe_send_message(bot, chat_id, await help_views.style(MESSAGE_TEMPLATES["private_only"]))
            return True

        view = await help_views.render_main_menu(1)
        await _send_menu(bot, message, view, menu_manager)
        return True

    if (
        command.startswith(HELP_COMMAND_PREFIX)
        and command.endswith(HELP_COMMAND_SUFFIX)
        and command != GENERIC_HELP_COMMAND
    ):
        token = command[len(HELP_COMMAND_PREFIX):-len(HELP_COMMAND_SUFFIX)]
        module_name = help_catalogue.find_by_trigger(token) if token else None

        # Sin restricción de tipo de chat, a diferencia de .menu
        if module_name:
            view = await help_views.render_module_detail(module_name)
            await _send_menu(bot, message, view, menu_manager)
        else:
            await safe_send_message(bot, chat_id, await help_views.render_not_found(token))
        return True

    return False


async def handle_callback(
    callback: CallbackQuery,
    bot: Bot,
    menu_manager: MenuManager,
    help_views: MenuViewBuilder
) -> None:
    """Despacha los botones help::*; cualquier otro callback se ignora"""
    parsed = parse_callback_data(callback.data)
    if parsed is None:
        return

    await safe_answer_callback(bot, callback.id)

    message = callback.message
    if message is None:
        return

    user_id = callback.from_user.id
    chat_id = message.chat.id
    message_id = message.message_id

    # Cualquier interacción reinicia el temporizador, incluso acciones desconocidas
    await menu_manager.refresh_menu(user_id, chat_id, message_id)

    if parsed.action == ACTION_MAIN:
        view = await help_views.render_main_menu(parse_page(parsed.argument))
        await _edit_menu(bot, chat_id, message_id, view, help_views)
    elif parsed.action == ACTION_SHOW:
        view = await help_views.render_module_detail(parsed.argument or "")
        await _edit_menu(bot, chat_id, message_id, view, help_views)
    elif parsed.action == ACTION_DELETE:
        result = await menu_manager.close_menu(user_id, chat_id, message_id)
        if not result.ok:
            await safe_send_message(bot, chat_id, await help_views.style(MESSAGE_TEMPLATES["delete_failed"]))
    elif parsed.action == ACTION_NOOP:
        pass
    else:
        logger.debug(f"Unknown help callback action '{parsed.action}' from user {user_id}")


@router.message(F.text)
async def help_text_entry(
    message: Message,
    bot: Bot,
    menu_manager: MenuManager,
    help_views: MenuViewBuilder,
    help_catalogue: HelpCatalogue
):
    """Punto de entrada de texto; cede el mensaje a otros routers si no es nuestro"""
    if not await handle_text_message(message, bot, menu_manager, help_views, help_catalogue):
        raise SkipHandler()


@router.callback_query(F.data.startswith(CALLBACK_PREFIX))
async def help_callback_entry(
    callback: CallbackQuery,
    bot: Bot,
    menu_manager: MenuManager,
    help_views: MenuViewBuilder
):
    await handle_callback(callback, bot, menu_manager, help_views)


# Funciones auxiliares

async def _send_menu(bot: Bot, message: Message, view: MenuView, menu_manager: MenuManager) -> None:
    sent = await safe_send_message(bot, message.chat.id, view.text, view.keyboard)
    if sent is None:
        return
    await menu_manager.open_menu(message.from_user.id, message.chat.id, sent.message_id)


async def _edit_menu(
    bot: Bot,
    chat_id: int,
    message_id: int,
    view: MenuView,
    help_views: MenuViewBuilder
) -> None:
    result = await safe_edit_message_text(bot, chat_id, message_id, view.text, view.keyboard)
    if result is EditResult.NOT_MODIFIED:
        logger.info("Help module: Message not modified, ignoring error.")
    elif result is EditResult.FAILED:
        logger.error(f"Help module callback error editing message {message_id} in chat {chat_id}")
        await safe_send_message(bot, chat_id, await help_views.style(MESSAGE_TEMPLATES["generic_error"]))

"""
Construcción de las vistas del menú de ayuda: (texto, teclado).
Sin I/O: el único await es el hook de transformación de texto.
"""
import math
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable, Mapping, NamedTuple, Optional, Tuple

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from utils.text_utils import apply_font
from .callbacks import build_callback_data
from .constants import (
    ACTION_DELETE,
    ACTION_MAIN,
    ACTION_NOOP,
    ACTION_SHOW,
    BUTTON_LABELS,
    BUTTONS_PER_PAGE,
    BUTTONS_PER_ROW,
    COMMAND_SEPARATOR,
    MESSAGE_TEMPLATES,
    MODULE_NAME,
    PRIVATE_CHAT_PREFIX,
)
from .schemas import ModuleHelpSchema

TextTransform = Callable[[str, str], Awaitable[str]]


class MenuView(NamedTuple):
    text: str
    keyboard: InlineKeyboardMarkup


@dataclass(frozen=True)
class PageState:
    """Página actual del menú principal (se recalcula en cada render)"""
    names: Tuple[str, ...]
    page: int
    total_pages: int

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(names: Iterable[str], page: int, per_page: int = BUTTONS_PER_PAGE) -> PageState:
    """Ordena, trocea y ajusta `page` al rango [1, total_pages]"""
    ordered = sorted(names)
    total_pages = max(1, math.ceil(len(ordered) / per_page))
    current = max(1, min(page, total_pages))
    start = (current - 1) * per_page
    return PageState(tuple(ordered[start:start + per_page]), current, total_pages)


def format_details(details: str) -> str:
    """Recorta cada línea y elimina las vacías"""
    return "\n".join(line.strip() for line in details.split("\n") if line.strip())


class MenuViewBuilder:
    """Genera el menú principal paginado y la ayuda detallada de cada módulo"""

    def __init__(
        self,
        modules: Mapping[str, ModuleHelpSchema],
        transform: TextTransform = apply_font,
        module_context: str = MODULE_NAME,
        per_page: int = BUTTONS_PER_PAGE,
        per_row: int = BUTTONS_PER_ROW
    ):
        self.modules = modules
        self.transform = transform
        self.module_context = module_context
        self.per_page = per_page
        self.per_row = per_row

    async def style(self, fragment: str) -> str:
        """Aplica el hook de transformación a un fragmento suelto"""
        return await self.transform(self.module_context, fragment)

    async def render_main_menu(self, page: int = 1) -> MenuView:
        state = paginate(self.modules.keys(), page, self.per_page)

        text = (
            f"📚 *{await self.style(MESSAGE_TEMPLATES['main_title'])}* 📚\n\n"
            f"{await self.style(MESSAGE_TEMPLATES['main_body'])}"
        )

        builder = InlineKeyboardBuilder()
        buttons = [
            InlineKeyboardButton(
                text=await self.style(name),
                callback_data=build_callback_data(ACTION_SHOW, name)
            )
            for name in state.names
        ]
        for i in range(0, len(buttons), self.per_row):
            builder.row(*buttons[i:i + self.per_row])

        if state.total_pages > 1:
            pagination = []
            if state.has_prev:
                pagination.append(InlineKeyboardButton(
                    text=BUTTON_LABELS["prev"],
                    callback_data=build_callback_data(ACTION_MAIN, str(state.page - 1))
                ))
            pagination.append(InlineKeyboardButton(
                text=f"{state.page}/{state.total_pages}",
                callback_data=build_callback_data(ACTION_NOOP)
            ))
            if state.has_next:
                pagination.append(InlineKeyboardButton(
                    text=BUTTON_LABELS["next"],
                    callback_data=build_callback_data(ACTION_MAIN, str(state.page + 1))
                ))
            builder.row(*pagination)

        builder.row(InlineKeyboardButton(
            text=await self.style(BUTTON_LABELS["delete"]),
            callback_data=build_callback_data(ACTION_DELETE)
        ))
        return MenuView(text, builder.as_markup())

    async def render_module_detail(self, module_name: str) -> MenuView:
        info: Optional[ModuleHelpSchema] = self.modules.get(module_name)
        if info is None:
            return MenuView(await self.render_not_found(module_name), await self._back_keyboard())

        title = MESSAGE_TEMPLATES["module_title"].format(module=module_name)
        text = f"📖 *{await self.style(title)}* 📖\n\n"
        text += f"*{await self.style(MESSAGE_TEMPLATES['summary_label'])}* {await self.style(info.summary)}\n\n"

        if info.commands:
            text += f"*{await self.style(MESSAGE_TEMPLATES['commands_label'])}*\n"
            for command in info.commands:
                text += await self._format_command(command)
            text += "\n"
        else:
            text += f"{await self.style(MESSAGE_TEMPLATES['no_commands'])}\n\n"

        text += f"*{await self.style(MESSAGE_TEMPLATES['details_label'])}*\n"
        text += await self.style(format_details(info.details))

        return MenuView(text, await self._back_keyboard())

    async def render_not_found(self, module_name: str) -> str:
        return f"❌ {await self.style(MESSAGE_TEMPLATES['not_found'])} *{await self.style(module_name)}*"

    # Funciones auxiliares

    async def _format_command(self, command: str) -> str:
        command_part, sep, description = command.partition(COMMAND_SEPARATOR)
        if not sep:
            return f"• `{await self.style(command)}`\n"
        if command_part.startswith(PRIVATE_CHAT_PREFIX):
            # Uso en chat privado: la línea completa en un solo bloque
            return f"• ```{await self.style(command)}```\n"
        return f"• `{command_part}` - ```{await self.style(description)}```\n"

    async def _back_keyboard(self) -> InlineKeyboardMarkup:
        builder = InlineKeyboardBuilder()
        builder.row(InlineKeyboardButton(
            text=await self.style(BUTTON_LABELS["back"]),
            callback_data=build_callback_data(ACTION_MAIN)
        ))
        return builder.as_markup()

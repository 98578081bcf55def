"""
Estilos de fuente por módulo para los textos del bot.
Solo se transforman letras y dígitos ASCII, así que aplicar un estilo dos veces
no cambia el resultado.
"""
import logging
import string
from typing import Dict, List

logger = logging.getLogger(__name__)

DEFAULT_FONT = "normal"


def _offset_table(upper_start: int, lower_start: int, digit_start: int = 0) -> Dict[int, str]:
    table = {}
    for i, ch in enumerate(string.ascii_uppercase):
        table[ord(ch)] = chr(upper_start + i)
    for i, ch in enumerate(string.ascii_lowercase):
        table[ord(ch)] = chr(lower_start + i)
    if digit_start:
        for i, ch in enumerate(string.digits):
            table[ord(ch)] = chr(digit_start + i)
    return table


FONT_STYLES: Dict[str, Dict[int, str]] = {
    "normal": {},
    "bold": _offset_table(0x1D5D4, 0x1D5EE, 0x1D7EC),
    "italic": _offset_table(0x1D608, 0x1D622),
    "monospace": _offset_table(0x1D670, 0x1D68A, 0x1D7F6),
    "small_caps": str.maketrans(string.ascii_lowercase, "ᴀʙᴄᴅᴇꜰɢʜɪᴊᴋʟᴍɴᴏᴘǫʀꜱᴛᴜᴠᴡxʏᴢ"),
}

# módulo -> estilo
_module_fonts: Dict[str, str] = {}


def available_fonts() -> List[str]:
    return sorted(FONT_STYLES)


def register_module(module: str, style: str = DEFAULT_FONT) -> None:
    """Registra un módulo; no pisa el estilo si ya estaba registrado"""
    _module_fonts.setdefault(module, style if style in FONT_STYLES else DEFAULT_FONT)


def set_module_font(module: str, style: str) -> None:
    if style not in FONT_STYLES:
        raise ValueError(f"Unknown font style '{style}'. Available: {', '.join(available_fonts())}")
    _module_fonts[module] = style
    logger.info(f"Font for module {module} set to {style}")


def get_module_font(module: str) -> str:
    return _module_fonts.get(module, DEFAULT_FONT)


def style_text(text: str, style: str) -> str:
    table = FONT_STYLES.get(style)
    if not table:
        return text
    return text.translate(table)


async def apply_font(module: str, text: str) -> str:
    """Aplica el estilo configurado del módulo a un fragmento de texto"""
    return style_text(text, get_module_font(module))

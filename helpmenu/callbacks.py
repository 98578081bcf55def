"""
Formato de los datos de callback del menú de ayuda: help::<acción>[::<argumento>]
"""
from typing import NamedTuple, Optional

from .constants import CALLBACK_PREFIX, CALLBACK_SEPARATOR


class HelpCallback(NamedTuple):
    action: str
    argument: Optional[str] = None


def build_callback_data(action: str, argument: Optional[str] = None) -> str:
    if argument is None:
        return f"{CALLBACK_PREFIX}{action}"
    return f"{CALLBACK_PREFIX}{action}{CALLBACK_SEPARATOR}{argument}"


def is_help_callback(data: Optional[str]) -> bool:
    return bool(data) and data.startswith(CALLBACK_PREFIX)


def parse_callback_data(data: Optional[str]) -> Optional[HelpCallback]:
    """
    Devuelve None si el callback pertenece a otro módulo.
    La acción puede ser desconocida; eso lo decide quien despacha.
    """
    if not is_help_callback(data):
        return None
    payload = data[len(CALLBACK_PREFIX):]
    action, sep, argument = payload.partition(CALLBACK_SEPARATOR)
    return HelpCallback(action, argument if sep else None)


def parse_page(argument: Optional[str], default: int = 1) -> int:
    """Número de página de un callback main; valores no numéricos vuelven a la primera"""
    if argument is None:
        return default
    try:
        return int(argument)
    except ValueError:
        return default

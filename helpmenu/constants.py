"""
Constantes del módulo de ayuda
"""

MODULE_NAME = "Help"
MODULE_VERSION = "1.2.2"

# Callbacks: help::main[::page], help::show::<module>, help::delete_menu, help::noop
CALLBACK_PREFIX = "help::"
CALLBACK_SEPARATOR = "::"
ACTION_MAIN = "main"
ACTION_SHOW = "show"
ACTION_DELETE = "delete_menu"
ACTION_NOOP = "noop"

# Paginación (rejilla 3x3)
BUTTONS_PER_PAGE = 9
BUTTONS_PER_ROW = 3

# Inactividad antes de borrar un menú abierto
IDLE_TIMEOUT_SECONDS = 60

# Comandos de texto
MENU_COMMAND = ".menu"
HELP_COMMAND_PREFIX = "/"
HELP_COMMAND_SUFFIX = "help"
GENERIC_HELP_COMMAND = "/help"

# Líneas de uso que se muestran enteras en un solo bloque
PRIVATE_CHAT_PREFIX = "Private Chat:"
COMMAND_SEPARATOR = " - "

# Botones
BUTTON_LABELS = {
    "prev": "⬅️ Prev",
    "next": "Next ➡️",
    "delete": "🗑️ Delete Menu",
    "back": "🔙 Back to Main Menu",
}

# Plantillas de mensaje
MESSAGE_TEMPLATES = {
    "main_title": "Welcome to the Help Module!",
    "main_body": "Select a module below to learn more about its commands and functionality:",
    "module_title": "{module} Module Help",
    "summary_label": "Summary:",
    "commands_label": "Commands:",
    "no_commands": "No specific commands for this module.",
    "details_label": "Details:",
    "not_found": "Help not found for module:",
    "private_only": "This command only works in private chat.",
    "generic_error": "An error occurred while processing your request.",
    "delete_failed": "❌ Failed to delete the menu.",
}

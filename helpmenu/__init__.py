"""
Módulo de Ayuda para el bot
Menú paginado de ayuda por módulo, con borrado automático por inactividad
"""

from .catalogue import HelpCatalogue
from .schemas import ModuleHelpSchema
from .views import MenuView, MenuViewBuilder

__all__ = [
    'HelpCatalogue',
    'ModuleHelpSchema',
    'MenuView',
    'MenuViewBuilder',
]

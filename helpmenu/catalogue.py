"""
Catálogo de ayuda de los módulos del bot, cargado desde JSON
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from pydantic import ValidationError

from .schemas import ModuleHelpSchema

logger = logging.getLogger(__name__)

DEFAULT_CATALOGUE_FILE = "help_modules.json"


def normalize_module_key(name: str) -> str:
    """'Clean Module' -> 'cleanmodule' (para comandos /<modulo>help)"""
    return "".join(name.split()).lower()


class HelpCatalogue:
    """Gestiona la carga y acceso de solo lectura a la ayuda de cada módulo"""

    def __init__(
        self,
        data_path: Optional[Path] = None,
        modules: Optional[Mapping[str, ModuleHelpSchema]] = None
    ):
        self.data_path = data_path or Path(__file__).parent / "data" / DEFAULT_CATALOGUE_FILE
        self.modules: Dict[str, ModuleHelpSchema] = {}
        if modules is not None:
            self.modules = dict(modules)
        else:
            self._load_modules()
        self._triggers = {normalize_module_key(name): name for name in self.modules}

    def _load_modules(self) -> None:
        """Carga y valida todas las entradas del fichero JSON"""
        if not self.data_path.exists():
            logger.warning(f"Archivo de ayuda no encontrado: {self.data_path}")
            return

        try:
            with open(self.data_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error cargando ayuda {self.data_path}: {e}")
            return

        for name, entry in data.items():
            try:
                self.modules[name] = ModuleHelpSchema(**entry)
            except ValidationError as e:
                logger.error(f"Entrada de ayuda inválida para '{name}': {e}")

        logger.info(f"Catálogo de ayuda cargado: {len(self.modules)} módulos")

    def __len__(self) -> int:
        return len(self.modules)

    def __contains__(self, name: str) -> bool:
        return name in self.modules

    def get(self, name: str) -> Optional[ModuleHelpSchema]:
        return self.modules.get(name)

    def names(self) -> List[str]:
        return sorted(self.modules)

    def find_by_trigger(self, token: str) -> Optional[str]:
        """Nombre real del módulo a partir del texto de un comando, sin distinguir mayúsculas"""
        return self._triggers.get(normalize_module_key(token))

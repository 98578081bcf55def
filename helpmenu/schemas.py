"""
Esquemas de datos para el contenido de ayuda en JSON
"""
from typing import List
from pydantic import BaseModel, Field


class ModuleHelpSchema(BaseModel):
    """Ayuda de un módulo del bot"""
    summary: str
    commands: List[str] = Field(default_factory=list)
    details: str = ""

# © [2025] EDT&Partners. Licensed under CC BY 4.0.

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

class WidgetCreate(BaseModel):
    id: str
    guid: str
    name: Optional[str] = None
    start_url: Optional[str] = None
    # Preferences the widget declares, mapped to their default values
    preferences: Dict[str, Optional[str]] = Field(default_factory=dict)

class WidgetCatalog(BaseModel):
    widgets: List[WidgetCreate] = Field(default_factory=list)

from __future__ import annotations
from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class PluginModel(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    version: Optional[str] = None
    author: Optional[str] = None
    renderer_id: Optional[str] = None
    renderer_ids: List[str] = []
    types: List[str] = []
    status: str
    dir: Optional[str] = None
    setting: Optional[Dict[str, Any]] = None
    langs: List[str] = []


class PluginListResponse(BaseModel):
    plugins: List[PluginModel]
    count: int


class ReloadResponse(BaseModel):
    loaded: List[Optional[str]]
    count: int

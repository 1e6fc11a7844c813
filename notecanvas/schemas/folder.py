from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional, List

class FolderCreate(BaseModel):
    name: str
    parent_id: Optional[int] = None

class FolderUpdate(BaseModel):
    name: Optional[str] = None
    parent_id: Optional[int] = None

class MovePage(BaseModel):
    folder_id: Optional[int] = None

class FolderResponse(BaseModel):
    id: int
    user_id: int
    parent_id: Optional[int] = None
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class FolderPage(BaseModel):
    """Page listée dans l'arbre des dossiers"""
    id: int
    title: str
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class FolderTree(FolderResponse):
    pages: List[FolderPage] = []
    children: List["FolderTree"] = []

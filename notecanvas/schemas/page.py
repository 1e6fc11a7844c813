from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional, List
from notecanvas.schemas.block import BlockResponse

# Schemas pour les pages

class PageCreate(BaseModel):
    title: Optional[str] = None

class PageUpdate(BaseModel):
    title: Optional[str] = None

class PageResponse(BaseModel):
    id: int
    user_id: int
    title: str
    folder_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class PageSummary(PageResponse):
    block_count: int = 0

class PageWithBlocks(PageResponse):
    blocks: List[BlockResponse] = []

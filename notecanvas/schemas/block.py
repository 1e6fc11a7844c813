from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional, Any, List
from notecanvas.schemas.content import BlockType

class BlockCreate(BaseModel):
    """Créer un block"""
    page_id: int
    type: BlockType = "text"
    content: dict[str, Any] = {}
    order_index: int = 0

class BlockUpdate(BaseModel):
    """Modifier un block (champs partiels)"""
    type: Optional[BlockType] = None
    content: Optional[dict[str, Any]] = None
    order_index: Optional[int] = None

class BlockOrder(BaseModel):
    id: int
    order_index: int

class BlockReorder(BaseModel):
    block_orders: List[BlockOrder]

class BlockResponse(BaseModel):
    """Block retourné"""
    id: int
    page_id: int
    type: BlockType
    content: dict[str, Any]
    order_index: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session
from notecanvas.core.database import get_db
from notecanvas.core.deps import get_current_user
from notecanvas.models.user import User
from notecanvas.models.page import Page
from notecanvas.models.block import Block
from notecanvas.schemas.block import BlockCreate, BlockUpdate, BlockReorder, BlockResponse
from notecanvas.schemas.content import validate_content
from notecanvas.services.page_service import get_owned_page
from typing import List
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blocks", tags=["blocks"])

def get_owned_block(db: Session, user_id: int, block_id: int) -> Block:
    """Récupère un block dont la page appartient à l'user, sinon 403"""
    block = db.query(Block).join(Page, Page.id == Block.page_id).filter(
        Block.id == block_id,
        Page.user_id == user_id,
        Page.is_archived == False
    ).first()
    if not block:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
    return block

def check_content(block_type: str, content: dict) -> dict:
    try:
        return validate_content(block_type, content)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid {block_type} content: {e.errors()[0]['msg']}")

@router.get("/page/{page_id}", response_model=List[BlockResponse])
def list_blocks(page_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Récupérer tous les blocks d'une page"""
    if not get_owned_page(db, current_user.id, page_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    return db.query(Block).filter(Block.page_id == page_id).order_by(Block.order_index, Block.id).all()

@router.post("", response_model=BlockResponse, status_code=status.HTTP_201_CREATED)
def create_block(block_data: BlockCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Créer un block dans une page"""
    # Vérifier que la page appartient à l'user
    page = get_owned_page(db, current_user.id, block_data.page_id)
    if not page:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    new_block = Block(
        page_id=page.id,
        type=block_data.type,
        content=check_content(block_data.type, block_data.content),
        order_index=block_data.order_index
    )
    db.add(new_block)
    db.commit()
    db.refresh(new_block)
    return new_block

@router.put("/reorder/{page_id}", response_model=List[BlockResponse])
def reorder_blocks(page_id: int, body: BlockReorder, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Réordonner les blocks d'une page en une seule transaction"""
    if not get_owned_page(db, current_user.id, page_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    blocks = {
        block.id: block
        for block in db.query(Block).filter(Block.page_id == page_id).all()
    }
    for item in body.block_orders:
        if item.id not in blocks:
            db.rollback()
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
        blocks[item.id].order_index = item.order_index

    db.commit()
    return db.query(Block).filter(Block.page_id == page_id).order_by(Block.order_index, Block.id).all()

@router.get("/{block_id}", response_model=BlockResponse)
def get_block(block_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Récupérer un block spécifique"""
    return get_owned_block(db, current_user.id, block_id)

@router.put("/{block_id}", response_model=BlockResponse)
def update_block(block_id: int, block_data: BlockUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Modifier un block, le contenu est remplacé en entier"""
    block = get_owned_block(db, current_user.id, block_id)

    if block_data.type is not None:
        block.type = block_data.type
    if block_data.content is not None:
        block.content = check_content(block.type, block_data.content)
    if block_data.order_index is not None:
        block.order_index = block_data.order_index

    db.commit()
    db.refresh(block)
    return block

@router.delete("/{block_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_block(block_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Supprimer un block"""
    block = get_owned_block(db, current_user.id, block_id)
    db.delete(block)
    db.commit()
    logger.debug(f"Block {block_id} deleted")

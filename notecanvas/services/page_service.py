# IMPORTS
from sqlalchemy import func
from sqlalchemy.orm import Session
from notecanvas.models.page import Page
from notecanvas.models.block import Block
from typing import List, Tuple, Optional

# func 1: get_owned_page()
def get_owned_page(db: Session, user_id: int, page_id: int) -> Optional[Page]:
    # une page archivée est considérée comme absente
    return db.query(Page).filter(
        Page.id == page_id,
        Page.user_id == user_id,
        Page.is_archived == False
    ).first()

# func 2: get_page_with_blocks()
def get_page_with_blocks(db: Session, user_id: int, page_id: int) -> Tuple[Optional[Page], List[Block]]:

    page = get_owned_page(db, user_id, page_id)

    if not page:
        return None, []

    blocks = db.query(Block).filter(Block.page_id == page_id).order_by(Block.order_index, Block.id).all()

    return page, blocks

# func 3: list_pages_with_counts()
def list_pages_with_counts(db: Session, user_id: int) -> List[Tuple[Page, int]]:
    # pages les plus récemment modifiées d'abord, avec leur nombre de blocks
    rows = db.query(Page, func.count(Block.id)).outerjoin(
        Block, Block.page_id == Page.id
    ).filter(
        Page.user_id == user_id,
        Page.is_archived == False
    ).group_by(Page.id).order_by(Page.updated_at.desc(), Page.id.desc()).all()

    return [(page, count) for page, count in rows]

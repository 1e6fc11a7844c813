from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from notecanvas.core.database import get_db
from notecanvas.core.deps import get_current_user
from notecanvas.models.user import User
from notecanvas.models.page import Page
from notecanvas.schemas.block import BlockResponse
from notecanvas.schemas.page import PageCreate, PageUpdate, PageResponse, PageSummary, PageWithBlocks
from notecanvas.services.page_service import get_owned_page, get_page_with_blocks, list_pages_with_counts
from typing import List

router = APIRouter(prefix="/pages", tags=["pages"])

# Crée une page
@router.post("", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
def create_page(page_data: PageCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    title = (page_data.title or "").strip() or "Untitled"
    new_page = Page(user_id=current_user.id, title=title)
    db.add(new_page)
    db.commit()
    db.refresh(new_page)
    return new_page

@router.get("", response_model=List[PageSummary])
def list_pages(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    # Pages non archivées, les plus récentes d'abord
    rows = list_pages_with_counts(db, current_user.id)
    return [
        PageSummary(**PageResponse.model_validate(page).model_dump(), block_count=count)
        for page, count in rows
    ]

@router.get("/{page_id}", response_model=PageWithBlocks)
def get_page(page_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    # Récup une page avec ses blocks ordonnés
    page, blocks = get_page_with_blocks(db, current_user.id, page_id)
    if not page:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")
    return PageWithBlocks(
        **PageResponse.model_validate(page).model_dump(),
        blocks=[BlockResponse.model_validate(block) for block in blocks]
    )

@router.put("/{page_id}", response_model=PageResponse)
def update_page(page_id: int, page_data: PageUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    page = get_owned_page(db, current_user.id, page_id)
    if not page:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")

    if page_data.title is not None:
        title = page_data.title.strip()
        if not title:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title is required")
        page.title = title

    db.commit()
    db.refresh(page)
    return page

@router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_page(page_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    page = get_owned_page(db, current_user.id, page_id)
    if not page:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")

    page.is_archived = True
    db.commit()

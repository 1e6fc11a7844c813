from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from notecanvas.core.database import get_db
from notecanvas.core.deps import get_current_user
from notecanvas.models.user import User
from notecanvas.models.folder import Folder
from notecanvas.schemas.folder import FolderCreate, FolderUpdate, FolderResponse, FolderTree, MovePage
from notecanvas.schemas.page import PageResponse
from notecanvas.services.folder_service import build_folder_tree, creates_cycle, get_owned_folder
from notecanvas.services.page_service import get_owned_page
from typing import List

router = APIRouter(prefix="/folders", tags=["folders"])

@router.get("", response_model=List[FolderTree])
def list_folders(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Arbre des dossiers avec leurs pages"""
    return build_folder_tree(db, current_user.id)

@router.post("", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
def create_folder(folder_data: FolderCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    name = folder_data.name.strip()
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Folder name is required")

    # le dossier parent doit appartenir à l'user
    if folder_data.parent_id and not get_owned_folder(db, current_user.id, folder_data.parent_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    folder = Folder(user_id=current_user.id, name=name, parent_id=folder_data.parent_id or None)
    db.add(folder)
    db.commit()
    db.refresh(folder)
    return folder

@router.put("/move-page/{page_id}", response_model=PageResponse)
def move_page(page_id: int, body: MovePage, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Déplacer une page dans un dossier (ou à la racine avec folder_id null)"""
    page = get_owned_page(db, current_user.id, page_id)
    if not page:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Page not found")

    if body.folder_id and not get_owned_folder(db, current_user.id, body.folder_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    page.folder_id = body.folder_id or None
    db.commit()
    db.refresh(page)
    return page

@router.put("/{folder_id}", response_model=FolderResponse)
def update_folder(folder_id: int, folder_data: FolderUpdate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    folder = get_owned_folder(db, current_user.id, folder_id)
    if not folder:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Folder not found")

    if folder_data.name and folder_data.name.strip():
        folder.name = folder_data.name.strip()
    if "parent_id" in folder_data.model_fields_set:
        parent_id = folder_data.parent_id or None
        if parent_id and not get_owned_folder(db, current_user.id, parent_id):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
        # ni lui-même ni un de ses descendants
        if creates_cycle(db, current_user.id, folder.id, parent_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="A folder cannot be moved into itself")
        folder.parent_id = parent_id

    db.commit()
    db.refresh(folder)
    return folder

@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_folder(folder_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Supprimer un dossier et ses sous-dossiers; les pages sont détachées"""
    folder = get_owned_folder(db, current_user.id, folder_id)
    if not folder:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Folder not found")

    db.delete(folder)
    db.commit()

from sqlalchemy.orm import Session
from notecanvas.models.folder import Folder
from notecanvas.models.page import Page
from typing import List, Optional


def get_owned_folder(db: Session, user_id: int, folder_id: int) -> Optional[Folder]:
    return db.query(Folder).filter(Folder.id == folder_id, Folder.user_id == user_id).first()


def build_folder_tree(db: Session, user_id: int) -> List[dict]:
    """
    Construit l'arbre des dossiers de l'user.

    Chaque noeud est un dict {id, user_id, parent_id, name, created_at,
    updated_at, pages, children}. Un dossier dont le parent est introuvable
    remonte à la racine.
    """
    folders = db.query(Folder).filter(Folder.user_id == user_id).order_by(Folder.name).all()
    pages = db.query(Page).filter(
        Page.user_id == user_id,
        Page.is_archived == False,
        Page.folder_id.isnot(None)
    ).all()

    nodes = {}
    for folder in folders:
        nodes[folder.id] = {
            "id": folder.id,
            "user_id": folder.user_id,
            "parent_id": folder.parent_id,
            "name": folder.name,
            "created_at": folder.created_at,
            "updated_at": folder.updated_at,
            "pages": [],
            "children": [],
        }

    for page in pages:
        if page.folder_id in nodes:
            nodes[page.folder_id]["pages"].append(
                {"id": page.id, "title": page.title, "updated_at": page.updated_at}
            )

    roots = []
    for folder in folders:
        node = nodes[folder.id]
        if folder.parent_id and folder.parent_id in nodes:
            nodes[folder.parent_id]["children"].append(node)
        else:
            roots.append(node)

    return roots


def creates_cycle(db: Session, user_id: int, folder_id: int, parent_id: Optional[int]) -> bool:
    """Vrai si rattacher `folder_id` sous `parent_id` crée une boucle"""
    seen = set()
    current = parent_id
    while current is not None and current not in seen:
        if current == folder_id:
            return True
        seen.add(current)
        parent = get_owned_folder(db, user_id, current)
        current = parent.parent_id if parent else None
    return False

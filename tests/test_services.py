from datetime import datetime, timedelta
from notecanvas.models.page import Page
from notecanvas.models.block import Block
from notecanvas.models.folder import Folder
from notecanvas.services.page_service import get_owned_page, get_page_with_blocks, list_pages_with_counts
from notecanvas.services.folder_service import build_folder_tree

# ============ TESTS page_service.py ============

def test_get_page_with_blocks_ordered(db, test_user):
    """get_page_with_blocks() retourne page + blocks ordonnés"""
    page = Page(user_id=test_user.id, title="Test Page")
    db.add(page)
    db.commit()
    db.add_all([
        Block(page_id=page.id, type="text", content={}, order_index=2),
        Block(page_id=page.id, type="text", content={}, order_index=1),
        Block(page_id=page.id, type="text", content={}, order_index=3),
    ])
    db.commit()

    retrieved_page, blocks = get_page_with_blocks(db, test_user.id, page.id)

    assert retrieved_page.id == page.id
    assert [b.order_index for b in blocks] == [1, 2, 3]

def test_get_page_with_blocks_wrong_user(db, test_user):
    page = Page(user_id=test_user.id, title="Privée")
    db.add(page)
    db.commit()

    assert get_page_with_blocks(db, test_user.id + 1, page.id) == (None, [])

def test_get_owned_page_ignores_archived(db, test_user):
    page = Page(user_id=test_user.id, title="Archivée", is_archived=True)
    db.add(page)
    db.commit()

    assert get_owned_page(db, test_user.id, page.id) is None

def test_list_pages_most_recent_first(db, test_user):
    now = datetime.utcnow()
    old = Page(user_id=test_user.id, title="Ancienne", updated_at=now - timedelta(days=1))
    new = Page(user_id=test_user.id, title="Récente", updated_at=now)
    db.add_all([old, new])
    db.commit()
    db.add(Block(page_id=old.id, type="text", content={}, order_index=0))
    db.commit()

    rows = list_pages_with_counts(db, test_user.id)

    assert [(p.title, count) for p, count in rows] == [("Récente", 0), ("Ancienne", 1)]

# ============ TESTS folder_service.py ============

def test_build_folder_tree_orphan_goes_to_root(db, test_user):
    """Un dossier dont le parent n'existe plus remonte à la racine"""
    folder = Folder(user_id=test_user.id, name="Orphelin", parent_id=999)
    db.add(folder)
    db.commit()

    tree = build_folder_tree(db, test_user.id)

    assert [node["name"] for node in tree] == ["Orphelin"]

def test_build_folder_tree_sorted_by_name(db, test_user):
    db.add_all([Folder(user_id=test_user.id, name="B"), Folder(user_id=test_user.id, name="A")])
    db.commit()

    assert [node["name"] for node in build_folder_tree(db, test_user.id)] == ["A", "B"]

import pytest
from notecanvas.editor.layout import centered_position, default_position, derive_position, snap_to_grid
from notecanvas.editor.viewport import Viewport
from notecanvas.schemas.block import BlockResponse
from notecanvas.schemas.content import default_content


def block(type="text", order_index=0, content=None):
    return BlockResponse(id=1, page_id=1, type=type, order_index=order_index, content=content or {})


@pytest.mark.parametrize("order_index, expected", [
    (0, (100, 100)),
    (1, (550, 100)),
    (2, (1000, 100)),
    (3, (100, 380)),
    (7, (550, 660)),
])
def test_default_position_tiles_three_columns(order_index, expected):
    rect = derive_position(block(order_index=order_index))
    assert (rect.x, rect.y) == expected


@pytest.mark.parametrize("type, size", [
    ("text", (400, 150)),
    ("code", (500, 350)),
    ("drawing", (600, 400)),
    ("image", (400, 300)),
])
def test_default_size_by_type(type, size):
    rect = derive_position(block(type=type))
    assert (rect.width, rect.height) == size


def test_default_position_is_stable():
    b = block(type="code", order_index=4)
    assert derive_position(b) == derive_position(b) == default_position("code", 4)


def test_stored_position_shadows_default():
    stored = {"x": 13, "y": -7, "width": 321, "height": 123}
    for order_index in (0, 5, 42):
        rect = derive_position(block(order_index=order_index, content={"text": "", "position": stored}))
        assert rect.model_dump() == stored


def test_snap_to_grid_rounds_half_up():
    assert snap_to_grid(225) == 220
    assert snap_to_grid(230) == 240
    assert snap_to_grid(-10) == 0
    assert snap_to_grid(9.9) == 0


def test_new_block_centered_in_viewport():
    """Bloc texte, échelle 1, offset nul, canvas 800x600: centre moins demi-taille, aligné"""
    rect = centered_position("text", Viewport(), 800, 600)
    assert (rect.x, rect.y) == (200, 220)
    assert (rect.width, rect.height) == (400, 150)


def test_new_block_follows_pan_and_zoom():
    viewport = Viewport()
    viewport.pan(-400, -300)
    viewport.zoom(2)
    rect = centered_position("image", viewport, 800, 600)
    # centre écran (400, 300) -> canvas (400, 300)
    assert (rect.x, rect.y) == (200, 160)


def test_default_content_shapes():
    assert default_content("text") == {"text": ""}
    assert default_content("code") == {"code": "", "language": "javascript", "output": ""}
    assert default_content("drawing") == {"data": None}
    assert default_content("image") == {"url": "", "localData": None}

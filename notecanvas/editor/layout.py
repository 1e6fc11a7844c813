"""
Position des blocks sur le canvas.

Un block sans position stockée est placé sur une grille de 3 colonnes selon
son `order_index`. Dès qu'une position est stockée dans son contenu, elle est
renvoyée telle quelle et la position par défaut n'est plus jamais recalculée.
"""

import math
from typing import Any, Tuple

from notecanvas.schemas.content import Position

GRID_SIZE = 20
COLUMNS = 3
ORIGIN = 100
COLUMN_STEP = 450
ROW_STEP = 280

# (largeur, hauteur) par type de block
DEFAULT_SIZES: dict[str, Tuple[int, int]] = {
    "text": (400, 150),
    "code": (500, 350),
    "drawing": (600, 400),
    "image": (400, 300),
}


def snap_to_grid(value: float, grid: int = GRID_SIZE) -> float:
    # arrondi au demi supérieur, comme Math.round
    return math.floor(value / grid + 0.5) * grid


def default_size(block_type: str) -> Tuple[int, int]:
    return DEFAULT_SIZES.get(block_type, DEFAULT_SIZES["text"])


def default_position(block_type: str, order_index: int) -> Position:
    width, height = default_size(block_type)
    return Position(
        x=ORIGIN + (order_index % COLUMNS) * COLUMN_STEP,
        y=ORIGIN + (order_index // COLUMNS) * ROW_STEP,
        width=width,
        height=height,
    )


def derive_position(block: Any) -> Position:
    """Rectangle effectif d'un block: position stockée, sinon position par défaut"""
    stored = (block.content or {}).get("position")
    if stored:
        return Position.model_validate(stored)
    return default_position(block.type, block.order_index)


def centered_position(block_type: str, viewport, canvas_width: float, canvas_height: float) -> Position:
    """Position d'un nouveau block, centrée dans la vue courante et alignée sur la grille"""
    width, height = default_size(block_type)
    center = viewport.to_canvas_space((canvas_width / 2, canvas_height / 2))
    return Position(
        x=snap_to_grid(center.x - width / 2),
        y=snap_to_grid(center.y - height / 2),
        width=width,
        height=height,
    )

"""
Gestes de pointeur sur le canvas: pan, déplacement et redimensionnement.

`hit_test` classe un appui en cible typée, indépendamment de tout rendu.
`GestureController` est la machine à états idle / panning / dragging /
resizing. Il calcule les rectangles candidats mais n'écrit rien lui-même:
c'est la session qui les applique localement et les persiste au relâchement.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union
import logging

from notecanvas.editor.layout import derive_position, snap_to_grid
from notecanvas.editor.viewport import Point, PointLike, Viewport
from notecanvas.schemas.content import Position

logger = logging.getLogger(__name__)

HANDLE_HEIGHT = 32  # barre de déplacement en haut du block
RESIZE_HANDLE_SIZE = 16  # poignée carrée en bas à droite
MIN_WIDTH = 200
MIN_HEIGHT = 100


@dataclass(frozen=True)
class Background:
    pass


@dataclass(frozen=True)
class DragHandle:
    block_id: int


@dataclass(frozen=True)
class ResizeHandle:
    block_id: int


@dataclass(frozen=True)
class BlockBody:
    """Zone de contenu: sélectionne le block, ne démarre aucun geste"""
    block_id: int


HitTarget = Union[Background, DragHandle, ResizeHandle, BlockBody]


def hit_test(point: PointLike, blocks: Iterable, viewport: Viewport) -> HitTarget:
    """Cible sous un point écran; le dernier block dessiné est au-dessus"""
    p = viewport.to_canvas_space(point)
    for block in reversed(list(blocks)):
        rect = derive_position(block)
        if not (rect.x <= p.x <= rect.x + rect.width and rect.y <= p.y <= rect.y + rect.height):
            continue
        if p.x >= rect.x + rect.width - RESIZE_HANDLE_SIZE and p.y >= rect.y + rect.height - RESIZE_HANDLE_SIZE:
            return ResizeHandle(block.id)
        if p.y <= rect.y + HANDLE_HEIGHT:
            return DragHandle(block.id)
        return BlockBody(block.id)
    return Background()


def drag_rect(start_rect: Position, start: PointLike, pointer: PointLike, scale: float) -> Position:
    dx = (pointer[0] - start[0]) / scale
    dy = (pointer[1] - start[1]) / scale
    return start_rect.model_copy(update={
        "x": snap_to_grid(start_rect.x + dx),
        "y": snap_to_grid(start_rect.y + dy),
    })


def resize_rect(start_rect: Position, start: PointLike, pointer: PointLike, scale: float) -> Position:
    dx = (pointer[0] - start[0]) / scale
    dy = (pointer[1] - start[1]) / scale
    return start_rect.model_copy(update={
        "width": max(MIN_WIDTH, start_rect.width + dx),
        "height": max(MIN_HEIGHT, start_rect.height + dy),
    })


class GestureMode(str, Enum):
    IDLE = "idle"
    PANNING = "panning"
    DRAGGING = "dragging"
    RESIZING = "resizing"


@dataclass
class GestureSession:
    mode: GestureMode
    block_id: int
    start_pointer: Point
    start_rect: Position
    moved: bool = False


class GestureController:

    def __init__(self, viewport: Viewport):
        self.viewport = viewport
        self.mode = GestureMode.IDLE
        self.active: Optional[GestureSession] = None
        self._pan_start_pointer = Point(0.0, 0.0)
        self._pan_start_offset = Point(0.0, 0.0)

    def pointer_down(self, target: HitTarget, point: PointLike, rect: Optional[Position] = None) -> GestureMode:
        """
        Démarre un geste selon la cible.

        `rect` est le rectangle du block visé au moment de l'appui, requis
        pour un déplacement ou un redimensionnement. Un appui pendant un
        geste en cours est ignoré.
        """
        if self.mode != GestureMode.IDLE:
            logger.debug(f"pointer_down ignored while {self.mode.value}")
            return self.mode

        point = Point(*point)
        if isinstance(target, Background):
            self.mode = GestureMode.PANNING
            self._pan_start_pointer = point
            self._pan_start_offset = self.viewport.offset
            self.viewport.panning = True
            self.viewport.selected_block_id = None
        elif isinstance(target, DragHandle):
            self.viewport.selected_block_id = target.block_id
            self._start(GestureMode.DRAGGING, target.block_id, point, rect)
        elif isinstance(target, ResizeHandle):
            self._start(GestureMode.RESIZING, target.block_id, point, rect)
        elif isinstance(target, BlockBody):
            self.viewport.selected_block_id = target.block_id
        return self.mode

    def _start(self, mode: GestureMode, block_id: int, point: Point, rect: Optional[Position]) -> None:
        if rect is None:
            raise ValueError(f"{mode.value} needs the block rectangle")
        self.mode = mode
        self.active = GestureSession(mode=mode, block_id=block_id, start_pointer=point, start_rect=rect)

    def pointer_move(self, point: PointLike) -> Optional[Position]:
        """Rectangle candidat du block manipulé, ou None (idle ou pan)"""
        if self.mode == GestureMode.PANNING:
            self.viewport.offset = Point(
                point[0] - self._pan_start_pointer.x + self._pan_start_offset.x,
                point[1] - self._pan_start_pointer.y + self._pan_start_offset.y,
            )
            return None
        if self.active is None:
            return None

        self.active.moved = True
        compute = drag_rect if self.mode == GestureMode.DRAGGING else resize_rect
        return compute(self.active.start_rect, self.active.start_pointer, point, self.viewport.scale)

    def pointer_up(self) -> Optional[GestureSession]:
        """Termine le geste courant (relâchement ou sortie du canvas) et le retourne"""
        ended = self.active
        self.mode = GestureMode.IDLE
        self.active = None
        self.viewport.panning = False
        return ended

    @property
    def block_id(self) -> Optional[int]:
        return self.active.block_id if self.active else None

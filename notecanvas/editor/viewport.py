from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Tuple, Union

MIN_SCALE = 0.25
MAX_SCALE = 2.0
ZOOM_STEP = 0.1


class Point(NamedTuple):
    x: float
    y: float


PointLike = Union[Point, Tuple[float, float]]


def clamp_scale(scale: float) -> float:
    return min(MAX_SCALE, max(MIN_SCALE, scale))


@dataclass
class Viewport:
    """
    Etat de la vue du canvas, propre à une session et jamais persisté.

    `offset` est en pixels écran; `scale` reste dans [0.25, 2.0].
    """
    scale: float = 1.0
    offset: Point = field(default_factory=lambda: Point(0.0, 0.0))
    panning: bool = False
    selected_block_id: Optional[int] = None

    def pan(self, dx: float, dy: float) -> None:
        self.offset = Point(self.offset.x + dx, self.offset.y + dy)

    def zoom(self, factor: float, anchor: Optional[PointLike] = None) -> float:
        # anchor ignoré: le zoom pivote autour de l'origine du canvas
        self.scale = clamp_scale(self.scale * factor)
        return self.scale

    def zoom_in(self) -> float:
        self.scale = clamp_scale(self.scale + ZOOM_STEP)
        return self.scale

    def zoom_out(self) -> float:
        self.scale = clamp_scale(self.scale - ZOOM_STEP)
        return self.scale

    def wheel(self, delta_y: float, ctrl: bool = False) -> float:
        """Molette: ne zoome que si Ctrl est enfoncé"""
        if ctrl:
            self.zoom(0.9 if delta_y > 0 else 1.1)
        return self.scale

    def to_canvas_space(self, point: PointLike) -> Point:
        x, y = point
        return Point((x - self.offset.x) / self.scale, (y - self.offset.y) / self.scale)

    def to_screen_space(self, point: PointLike) -> Point:
        x, y = point
        return Point(x * self.scale + self.offset.x, y * self.scale + self.offset.y)

    def reset(self) -> None:
        self.scale = 1.0
        self.offset = Point(0.0, 0.0)

    @property
    def zoom_percent(self) -> int:
        return round(self.scale * 100)

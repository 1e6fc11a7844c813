"""
Session d'édition d'une page sur le canvas.

La session possède l'état local de la page (blocks, titre) et la vue. Toutes
les mutations passent par elle: les éditeurs de blocks ne reçoivent que leur
contenu et un callback `on_change`. Les appels distants partent sous forme de
`Command` vers le dispatcher du contexte.

Politique de mise à jour:
- contenu d'un block: appliqué localement tout de suite, persisté ensuite,
  pas de retour arrière en cas d'échec;
- création: le block n'apparaît qu'une fois créé côté serveur;
- suppression: retirée localement tout de suite, la page est rechargée si
  l'appel échoue;
- titre: mis à jour localement seulement après confirmation;
- déplacement / redimensionnement: suivi local à chaque mouvement, une seule
  requête au relâchement.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

from notecanvas.editor.commands import Command, Dispatcher
from notecanvas.editor.gestures import DragHandle, GestureController, HitTarget, ResizeHandle, hit_test
from notecanvas.editor.layout import centered_position, derive_position
from notecanvas.editor.viewport import PointLike, Viewport
from notecanvas.schemas.block import BlockResponse
from notecanvas.schemas.content import BLOCK_TYPES, Position, default_content
from notecanvas.schemas.page import PageWithBlocks

logger = logging.getLogger(__name__)


def _stay(route: str) -> None:
    pass


@dataclass
class EditorContext:
    """Dépendances de la session, injectées explicitement"""
    dispatcher: Dispatcher
    navigate: Callable[[str], None] = _stay
    canvas_width: float = 800
    canvas_height: float = 600
    home_route: str = "/"


class PageSession:

    def __init__(self, context: EditorContext):
        self.context = context
        self.page: Optional[PageWithBlocks] = None
        self.viewport = Viewport()
        self.gestures = GestureController(self.viewport)
        self.loading = False
        self.saving = False
        self.closed = False
        self._page_id: Optional[int] = None

    # Etat

    @property
    def blocks(self) -> List[BlockResponse]:
        return self.page.blocks if self.page else []

    def find_block(self, block_id: Optional[int]) -> Optional[BlockResponse]:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    def layout(self) -> List[Tuple[BlockResponse, Position]]:
        """Blocks avec leur rectangle effectif, dans l'ordre de dessin"""
        return [(block, derive_position(block)) for block in self.blocks]

    def _is_current(self, page_id: int) -> bool:
        # une réponse arrivée après fermeture ou changement de page est ignorée
        return not self.closed and self._page_id == page_id

    def _send(self, operation: str, payload: Dict[str, Any], on_complete=None) -> None:
        self.context.dispatcher.dispatch(Command(operation=operation, payload=payload, on_complete=on_complete))

    def close(self) -> None:
        self.closed = True

    # Page

    def load(self, page_id: int) -> None:
        if page_id != self._page_id:
            # nouvelle page: l'état éphémère de la précédente ne la suit pas
            self.gestures.pointer_up()
            self.viewport.selected_block_id = None
            self.viewport.reset()
            self.page = None
        self._page_id = page_id
        self.loading = True

        def done(page: Optional[PageWithBlocks], error) -> None:
            if not self._is_current(page_id):
                logger.debug(f"Discarding stale load of page {page_id}")
                return
            self.loading = False
            if error:
                logger.error(f"Failed to load page {page_id}: {error}")
                self.page = None
                self.context.navigate(self.context.home_route)
                return
            self.page = page

        self._send("get_page", {"page_id": page_id}, done)

    def reload(self) -> None:
        if self._page_id is not None:
            self.load(self._page_id)

    def rename_title(self, new_title: str) -> bool:
        """Renomme la page; retourne False sans requête si le titre est vide"""
        if self.page is None:
            return False
        title = (new_title or "").strip()
        if not title:
            return False

        page_id = self.page.id
        self.saving = True

        def done(page, error) -> None:
            if not self._is_current(page_id):
                return
            self.saving = False
            if error:
                logger.error(f"Failed to update title: {error}")
                return
            self.page.title = page.title

        self._send("update_page", {"page_id": page_id, "title": title}, done)
        return True

    # Blocks

    def create_block(self, block_type: str) -> None:
        if self.page is None:
            return
        if block_type not in BLOCK_TYPES:
            raise ValueError(f"Unknown block type: {block_type}")

        position = centered_position(
            block_type, self.viewport, self.context.canvas_width, self.context.canvas_height
        )
        content = {**default_content(block_type), "position": position.model_dump()}
        page_id = self.page.id

        def done(block: Optional[BlockResponse], error) -> None:
            if error:
                logger.error(f"Failed to add block: {error}")
                return
            if not self._is_current(page_id) or self.page is None:
                return
            self.page.blocks.append(block)
            self.viewport.selected_block_id = block.id

        self._send("create_block", {
            "page_id": page_id,
            "type": block_type,
            "content": content,
            "order_index": len(self.page.blocks),
        }, done)

    def update_block_content(self, block_id: int, partial: Dict[str, Any]) -> None:
        """Fusion superficielle de `partial` dans le contenu du block, puis sauvegarde"""
        block = self.find_block(block_id)
        if block is None:
            logger.debug(f"update_block_content: block {block_id} not found")
            return

        # la position appartient au canvas, pas aux éditeurs de blocks
        changes = {key: value for key, value in partial.items() if key != "position"}
        block.content = {**block.content, **changes}
        self._persist(block)

    def on_change(self, block_id: int) -> Callable[[Dict[str, Any]], None]:
        """Callback donné à l'éditeur du block"""
        return lambda content: self.update_block_content(block_id, content)

    def delete_block(self, block_id: int) -> None:
        if self.page is None or self.find_block(block_id) is None:
            return

        page_id = self.page.id
        self.page.blocks = [b for b in self.page.blocks if b.id != block_id]
        if self.viewport.selected_block_id == block_id:
            self.viewport.selected_block_id = None

        def done(_, error) -> None:
            if error:
                logger.error(f"Failed to delete block {block_id}: {error}")
                if self._is_current(page_id):
                    self.reload()

        self._send("delete_block", {"block_id": block_id}, done)

    def _persist(self, block: BlockResponse) -> None:
        block_id = block.id

        def done(_, error) -> None:
            if error:
                logger.error(f"Failed to update block {block_id}: {error}")

        self._send("update_block", {"block_id": block_id, "content": dict(block.content)}, done)

    # Pointeur

    def pointer_down(self, point: PointLike) -> HitTarget:
        target = hit_test(point, self.blocks, self.viewport)
        rect = None
        if isinstance(target, (DragHandle, ResizeHandle)):
            rect = derive_position(self.find_block(target.block_id))
        self.gestures.pointer_down(target, point, rect)
        return target

    def pointer_move(self, point: PointLike) -> Optional[Position]:
        candidate = self.gestures.pointer_move(point)
        if candidate is None:
            return None
        block = self.find_block(self.gestures.block_id)
        if block is None:
            return None
        block.content = {**block.content, "position": candidate.model_dump()}
        return candidate

    def pointer_up(self) -> None:
        ended = self.gestures.pointer_up()
        if ended is None or not ended.moved:
            return
        block = self.find_block(ended.block_id)
        if block is None:
            # supprimé pendant le geste
            logger.debug(f"Block {ended.block_id} gone before release, nothing to save")
            return
        self._persist(block)

    pointer_leave = pointer_up

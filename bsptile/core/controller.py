"""
bsptile.core.controller - Controlador de interaccion del layout BSP.

El TileController es dueno del arbol actual y del estado de arrastre.
La capa de UI (fuera de este paquete) le reenvia los eventos del
puntero y de los botones; el controlador los convierte en reescrituras
del arbol y publica el arbol nuevo con una sola asignacion.

Ciclo de un arrastre:

    IDLE --on_drag_start(leaf)--> DRAGGING
    DRAGGING --on_drag(dx, dy)--> DRAGGING   (se recalcula destino/posicion)
    DRAGGING --on_drag_cancel()--> DRAGGING  (se limpia destino/posicion)
    DRAGGING --on_drag_end()--> IDLE         (inserta si hay destino+posicion)

La posicion se mide contra el rectangulo del propio tile arrastrado:
moverlo mas de medio ancho a la derecha da RIGHT, mas de medio alto
hacia arriba da TOP, y si no se sale de su mitad da REPLACE.

Uso tipico:
    ctl = TileController(Rect(0, 0, 1280, 720))
    ctl.split_leaf(ctl.root, is_vertical=True)
    left, right = ctl.leaves
    ctl.on_drag_start(left)
    ctl.on_drag(700, 0)     # RIGHT, sobre el tile derecho
    ctl.on_drag_end()
"""

from __future__ import annotations

import enum
import logging
import random
from collections.abc import Callable

from bsptile.tiling.color import EMPTY_COLOR, Color
from bsptile.tiling.node import (
    Leaf,
    ScreenNode,
    contains,
    describe,
    initial_root,
    iter_leaves,
)
from bsptile.tiling.rect import Rect
from bsptile.tiling.rewrite import InsertPosition, insert_relative, remove_node, split
from bsptile.tiling.walker import find_rect, layout, leaf_at

log = logging.getLogger(__name__)


# Called with (old_root, new_root) after every committed change
TreeChangedCallback = Callable[[ScreenNode, ScreenNode], None]


class DragState(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


def classify_position(
    rect: Rect, px: float, py: float, drop_zone: float = 1.0
) -> InsertPosition:
    """
    Decide where a drop at (px, py) lands.

    *rect* is the dragged tile's rectangle at drag start. The pointer is
    compared to its centre: a horizontal displacement beyond half the
    width (scaled by *drop_zone*) selects LEFT/RIGHT, otherwise a
    vertical one beyond half the height selects TOP/BOTTOM, otherwise
    REPLACE.
    """
    half_w = rect.w / 2 * drop_zone
    half_h = rect.h / 2 * drop_zone
    dx = px - rect.center_x
    dy = py - rect.center_y

    if dx < -half_w:
        return InsertPosition.LEFT
    if dx > half_w:
        return InsertPosition.RIGHT
    if dy < -half_h:
        return InsertPosition.TOP
    if dy > half_h:
        return InsertPosition.BOTTOM
    return InsertPosition.REPLACE


class TileController:
    """
    Holds the layout tree and translates UI events into tree rewrites.

    Every action that produces a new tree replaces the root reference
    once; the old tree stays valid for anyone still reading it. Actions
    aimed at nodes that are no longer in the tree are no-ops.
    """

    def __init__(
        self,
        canvas: Rect,
        root: ScreenNode | None = None,
        rng: random.Random | None = None,
        drop_zone: float = 1.0,
        move_tiles: bool = False,
        collapse_leaf_pairs: bool = False,
        empty_color: Color = EMPTY_COLOR,
        gap: int = 0,
    ) -> None:
        """
        Args:
            canvas:              Region the whole tree is laid out in.
            root:                Starting tree. None creates a random leaf.
            rng:                 Random source for new tile colours.
            drop_zone:           See classify_position().
            move_tiles:          Remove the dragged tile from its source
                                 after a successful drop.
            collapse_leaf_pairs: Passed through to remove_node().
            empty_color:         Colour of the tile left when the last
                                 one is closed.
            gap:                 Inner margin of each tile in tiles().
        """
        self._canvas = canvas
        self._rng = rng
        self._root: ScreenNode = root if root is not None else initial_root(rng)
        self._drop_zone = drop_zone
        self._move_tiles = move_tiles
        self._collapse_leaf_pairs = collapse_leaf_pairs
        self._empty_color = empty_color
        self._gap = max(0, gap)

        self._state = DragState.IDLE
        self._dragging: Leaf | None = None
        self._origin: Rect | None = None
        self._offset: tuple[float, float] = (0.0, 0.0)
        self._hovered: Leaf | None = None
        self._target: Leaf | None = None
        self._position: InsertPosition | None = None

        self._on_changed: list[TreeChangedCallback] = []

        log.info("TileController started | canvas=%s | root=%s", canvas, describe(self._root))

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def root(self) -> ScreenNode:
        return self._root

    @property
    def canvas(self) -> Rect:
        return self._canvas

    @canvas.setter
    def canvas(self, value: Rect) -> None:
        log.info("Canvas resized: %s -> %s", self._canvas, value)
        self._canvas = value

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def dragging(self) -> Leaf | None:
        return self._dragging

    @property
    def target(self) -> Leaf | None:
        return self._target

    @property
    def position(self) -> InsertPosition | None:
        return self._position

    @property
    def leaves(self) -> list[Leaf]:
        """Leaves of the current tree in layout order."""
        return list(iter_leaves(self._root))

    def layout(self) -> list[tuple[Leaf, Rect]]:
        """(leaf, rect) for every tile of the current tree."""
        return layout(self._root, self._canvas)

    def tiles(self) -> list[tuple[Leaf, Rect]]:
        """Like layout(), with each rect padded by the gap for drawing."""
        return [(leaf, rect.pad(self._gap)) for leaf, rect in self.layout()]

    def rect_of(self, leaf: ScreenNode) -> Rect | None:
        return find_rect(self._root, self._canvas, leaf)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def on_tree_changed(self, callback: TreeChangedCallback) -> None:
        """
        Register a callback invoked after every committed change.

        The callback receives (old_root, new_root).
        """
        self._on_changed.append(callback)

    def _commit(self, new_root: ScreenNode, action: str, *args: object) -> bool:
        if new_root is self._root:
            log.debug(action + ": no change (stale target?)", *args)
            return False

        old_root = self._root
        self._root = new_root
        log.info(action + " -> %s", *args, describe(new_root))

        for cb in self._on_changed:
            try:
                cb(old_root, new_root)
            except Exception:
                log.exception("Error in on_tree_changed callback")
        return True

    # ------------------------------------------------------------------
    # Button actions
    # ------------------------------------------------------------------
    def split_leaf(self, leaf: ScreenNode, is_vertical: bool) -> bool:
        """Split a tile in two. Returns True if the tree changed."""
        new_root = split(self._root, leaf, is_vertical, self._rng)
        return self._commit(new_root, "split %s %r", "V" if is_vertical else "H", leaf)

    def can_remove(self, leaf: ScreenNode) -> bool:
        """The root tile has no close button."""
        return leaf is not self._root and contains(self._root, leaf)

    def remove_leaf(self, leaf: ScreenNode) -> bool:
        """Close a tile. Returns True if the tree changed."""
        new_root = remove_node(
            self._root,
            leaf,
            collapse_leaf_pairs=self._collapse_leaf_pairs,
            empty_color=self._empty_color,
        )
        return self._commit(new_root, "remove %r", leaf)

    def reset(self) -> None:
        """Start over with a single random tile."""
        self._clear_drag()
        self._commit(initial_root(self._rng), "reset")

    # ------------------------------------------------------------------
    # Drag gestures
    # ------------------------------------------------------------------
    def on_drag_start(self, leaf: Leaf) -> bool:
        """
        Begin dragging *leaf*.

        Ignored if a drag is already running or the leaf is not part of
        the current tree.
        """
        if self._state is DragState.DRAGGING:
            log.debug("on_drag_start: already dragging %r", self._dragging)
            return False

        origin = self.rect_of(leaf) if isinstance(leaf, Leaf) else None
        if origin is None:
            log.debug("on_drag_start: %r is not a tile of the current tree", leaf)
            return False

        self._state = DragState.DRAGGING
        self._dragging = leaf
        self._origin = origin
        self._offset = (0.0, 0.0)
        self._hovered = None
        self._target = None
        self._position = None
        log.debug("Drag started: %r at %s", leaf, origin)
        return True

    def on_hover(self, leaf: Leaf) -> None:
        """The UI reports that the pointer entered *leaf*."""
        self._hovered = leaf

    def on_leave(self) -> None:
        """The UI reports that the pointer left the hovered tile."""
        self._hovered = None
        self._target = None

    def on_drag(self, dx: float, dy: float) -> InsertPosition | None:
        """
        Pointer moved by (dx, dy) since the last event.

        The target is the hovered tile if the UI reported one, else the
        tile under the pointer, else (pointer off the canvas) the last
        target. The position is measured against the dragged tile's own
        rectangle: moving it more than half its width to the right gives
        RIGHT, and so on.

        Returns:
            The new position, or None when there is no target tile.
        """
        if self._state is not DragState.DRAGGING or self._origin is None:
            return None

        ox, oy = self._offset
        self._offset = (ox + dx, oy + dy)
        px = self._origin.center_x + self._offset[0]
        py = self._origin.center_y + self._offset[1]

        candidate: Leaf | None = None
        if self._hovered is not None and self.rect_of(self._hovered) is not None:
            candidate = self._hovered
        else:
            hit = leaf_at(self._root, self._canvas, px, py)
            if hit is not None:
                candidate = hit[0]
            elif self._target is not None and self.rect_of(self._target) is not None:
                # Pointer left the canvas: keep the last tile
                candidate = self._target

        if candidate is None:
            self._target = None
            self._position = None
            return None

        self._target = candidate
        self._position = classify_position(self._origin, px, py, self._drop_zone)
        log.debug(
            "Drag over %r at (%.0f, %.0f): %s",
            candidate, px, py, self._position.value,
        )
        return self._position

    def on_drag_cancel(self) -> None:
        """Forget the drop target; a following on_drag_end() does nothing."""
        self._hovered = None
        self._target = None
        self._position = None
        log.debug("Drag cancelled")

    def on_drag_end(self) -> bool:
        """
        Finish the drag.

        Inserts the dragged tile at the recorded target/position if both
        are set. The drag state is always cleared.

        Returns:
            True if the tree changed.
        """
        dragging, target, position = self._dragging, self._target, self._position
        self._clear_drag()

        if dragging is None or target is None or position is None:
            log.debug("Drag ended without a drop target")
            return False

        new_root = insert_relative(self._root, target, dragging, position)
        if self._move_tiles and target is not dragging and new_root is not self._root:
            new_root = remove_node(
                new_root,
                dragging,
                collapse_leaf_pairs=self._collapse_leaf_pairs,
                empty_color=self._empty_color,
            )

        return self._commit(new_root, "drop %r %s %r", dragging, position.value, target)

    def _clear_drag(self) -> None:
        self._state = DragState.IDLE
        self._dragging = None
        self._origin = None
        self._offset = (0.0, 0.0)
        self._hovered = None
        self._target = None
        self._position = None

    # ------------------------------------------------------------------
    # Debug
    # ------------------------------------------------------------------
    def dump_state(self) -> str:
        lines = [
            f"=== TileController: {len(self.leaves)} tiles ===",
            f"    Canvas: {self._canvas}",
            f"    Tree: {describe(self._root)}",
            f"    Drag: {self._state.value}",
        ]
        if self._dragging is not None:
            pos = self._position.value if self._position else "-"
            lines.append(f"    Dragging: {self._dragging!r} -> {self._target!r} ({pos})")
        for i, (leaf, rect) in enumerate(self.layout()):
            lines.append(f"    [{i}] {leaf!r} {rect}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"TileController(canvas={self._canvas}, "
            f"tiles={len(self.leaves)}, state={self._state.value})"
        )

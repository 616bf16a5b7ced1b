"""
bsptile.tiling.rewrite - Operaciones de reescritura del arbol BSP.

Todas las operaciones son puras: reciben un arbol y un nodo destino
(por identidad) y retornan un arbol nuevo. Nunca modifican nodos.

Solo se reconstruye el camino desde la raiz hasta el destino; cualquier
subarbol que no contiene al destino se retorna tal cual (el mismo
objeto), asi el arbol nuevo comparte todo lo que no cambio.

Si el destino no esta en el arbol (referencia vieja, tile ya cerrado),
la operacion no hace nada y retorna el arbol original. No es un error.

Operaciones:
    - split           : divide un tile en dos tiles nuevos.
    - remove_node     : cierra un tile; su hermano ocupa el lugar del padre.
    - insert_relative : inserta un tile arrastrado junto a otro o en su lugar.
"""

from __future__ import annotations

import enum
import logging
import random

from bsptile.tiling.color import EMPTY_COLOR, Color, random_color
from bsptile.tiling.node import Internal, Leaf, ScreenNode

log = logging.getLogger(__name__)


class InsertPosition(enum.Enum):
    """Donde cae el tile arrastrado respecto al tile destino."""
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    REPLACE = "replace"


def _rebuild(node: Internal, left: ScreenNode, right: ScreenNode) -> Internal:
    """Reutiliza *node* si ningun hijo cambio."""
    if left is node.left and right is node.right:
        return node
    return Internal(left, right, node.is_vertical)


# ============================================================================
# split
# ============================================================================

def _split(
    node: ScreenNode,
    target: ScreenNode,
    is_vertical: bool,
    rng: random.Random | None,
) -> ScreenNode:
    if isinstance(node, Leaf):
        if node is target:
            return Internal(
                Leaf(random_color(rng)), Leaf(random_color(rng)), is_vertical
            )
        return node

    return _rebuild(
        node,
        _split(node.left, target, is_vertical, rng),
        _split(node.right, target, is_vertical, rng),
    )


def split(
    root: ScreenNode,
    target: ScreenNode,
    is_vertical: bool,
    rng: random.Random | None = None,
) -> ScreenNode:
    """
    Reemplaza la hoja *target* por un Internal con dos hojas nuevas.

    Las dos hojas reciben colores aleatorios independientes; el color
    del tile original se descarta.

    Args:
        root:        Arbol actual.
        target:      Hoja a dividir (por identidad).
        is_vertical: Orientacion del Internal nuevo.
        rng:         Generador para los colores (opcional).

    Returns:
        El arbol nuevo, o *root* sin cambios si no se encontro el destino.
    """
    result = _split(root, target, is_vertical, rng)
    if result is root:
        log.debug("split: target %r not in tree, unchanged", target)
    else:
        log.debug("split: %r -> %s", target, "vertical" if is_vertical else "horizontal")
    return result


# ============================================================================
# remove_node
# ============================================================================

def _remove(
    node: ScreenNode,
    target: ScreenNode,
    collapse_leaf_pairs: bool,
    empty_color: Color,
) -> ScreenNode:
    if node is target:
        # Solo ocurre en la raiz: el canvas nunca queda sin nodo
        return Leaf(empty_color)
    if isinstance(node, Leaf):
        return node

    # El hermano sube a ocupar el lugar del padre
    if node.left is target:
        return node.right
    if node.right is target:
        return node.left

    left = _remove(node.left, target, collapse_leaf_pairs, empty_color)
    right = _remove(node.right, target, collapse_leaf_pairs, empty_color)
    if left is node.left and right is node.right:
        return node

    if collapse_leaf_pairs and isinstance(left, Leaf) and isinstance(right, Leaf):
        return left

    return Internal(left, right, node.is_vertical)


def remove_node(
    root: ScreenNode,
    target: ScreenNode,
    collapse_leaf_pairs: bool = False,
    empty_color: Color = EMPTY_COLOR,
) -> ScreenNode:
    """
    Cierra el tile *target*.

    Reglas:
        - Si *root* es el destino, queda una hoja vacia (empty_color).
        - Si un hijo directo de un Internal es el destino, el Internal
          entero se reemplaza por el otro hijo.
        - Si no, se desciende por ambos hijos.

    Con collapse_leaf_pairs=True, un Internal cuyo subarbol cambio y
    cuyos dos hijos resultantes son hojas colapsa a la hoja izquierda.
    Es la variante alternativa de cierre; por defecto esta desactivada.

    Returns:
        El arbol nuevo, o *root* sin cambios si no se encontro el destino.
    """
    result = _remove(root, target, collapse_leaf_pairs, empty_color)
    if result is root:
        log.debug("remove_node: target %r not in tree, unchanged", target)
    else:
        log.debug("remove_node: removed %r", target)
    return result


# ============================================================================
# insert_relative
# ============================================================================

def _insert(
    node: ScreenNode,
    target: ScreenNode,
    dragging: Leaf,
    position: InsertPosition,
) -> ScreenNode:
    if isinstance(node, Leaf):
        if node is not target:
            return node

        new_leaf = Leaf(dragging.color)
        if position == InsertPosition.LEFT:
            return Internal(new_leaf, node, True)
        if position == InsertPosition.RIGHT:
            return Internal(node, new_leaf, True)
        if position == InsertPosition.TOP:
            return Internal(new_leaf, node, False)
        if position == InsertPosition.BOTTOM:
            return Internal(node, new_leaf, False)
        return new_leaf

    return _rebuild(
        node,
        _insert(node.left, target, dragging, position),
        _insert(node.right, target, dragging, position),
    )


def insert_relative(
    root: ScreenNode,
    target: ScreenNode,
    dragging: Leaf,
    position: InsertPosition,
) -> ScreenNode:
    """
    Inserta una copia del tile *dragging* respecto a la hoja *target*.

    Posiciones:
        LEFT / RIGHT : Internal vertical, el tile nuevo a la izquierda
                       o a la derecha del destino.
        TOP / BOTTOM : Internal horizontal, el tile nuevo arriba o abajo.
        REPLACE      : el destino se reemplaza por el tile nuevo.

    El tile nuevo es una hoja nueva con el color de *dragging*. La hoja
    arrastrada NO se quita de su lugar original; eso lo decide quien
    llama (ver TileController.move_tiles).

    Returns:
        El arbol nuevo, o *root* sin cambios si no se encontro el destino.
    """
    result = _insert(root, target, dragging, position)
    if result is root:
        log.debug("insert_relative: target %r not in tree, unchanged", target)
    else:
        log.debug("insert_relative: %r %s %r", dragging, position.value, target)
    return result

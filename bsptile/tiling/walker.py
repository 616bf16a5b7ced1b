"""
bsptile.tiling.walker - Calculo de geometria del arbol BSP.

Dado un arbol y la region del canvas, asigna a cada hoja el rectangulo
que ocupa. Cada nodo Internal parte su region a la mitad con
Rect.split_half segun su orientacion, de modo que los dos hijos cubren
exactamente al padre sin huecos ni solapes.

La geometria nunca se guarda en el arbol: se recalcula en cada pasada
(O(hojas)), tanto para dibujar como para el hit-testing.
"""

from __future__ import annotations

from collections.abc import Iterator

from bsptile.tiling.node import Internal, Leaf, ScreenNode
from bsptile.tiling.rect import Rect


def _as_rect(args: tuple) -> Rect:
    if len(args) == 1 and isinstance(args[0], Rect):
        return args[0]
    if len(args) == 4:
        return Rect(*args)
    raise TypeError("expected a Rect or (x, y, width, height)")


def walk(node: ScreenNode, *region) -> Iterator[tuple[Leaf, Rect]]:
    """
    Recorre las hojas alcanzables desde *node* con su rectangulo.

    Acepta la region como un Rect o como cuatro enteros:
        walk(root, Rect(0, 0, 800, 600))
        walk(root, 0, 0, 800, 600)

    Yields:
        Tuplas (hoja, rect) en orden izquierda-derecha / arriba-abajo.
    """
    rect = _as_rect(region)
    if isinstance(node, Leaf):
        yield node, rect
        return

    first, second = rect.split_half(node.is_vertical)
    yield from walk(node.left, first)
    yield from walk(node.right, second)


def layout(node: ScreenNode, rect: Rect) -> list[tuple[Leaf, Rect]]:
    """Atajo: el resultado de walk() como lista."""
    return list(walk(node, rect))


def leaf_at(
    node: ScreenNode, rect: Rect, px: float, py: float
) -> tuple[Leaf, Rect] | None:
    """
    Hit-test: retorna (hoja, rect) de la hoja que contiene el punto.

    Desciende solo por la mitad que contiene el punto. Retorna None si
    el punto cae fuera del canvas.
    """
    if not rect.contains(px, py):
        return None

    while isinstance(node, Internal):
        first, second = rect.split_half(node.is_vertical)
        if first.contains(px, py):
            node, rect = node.left, first
        else:
            node, rect = node.right, second

    return node, rect


def find_rect(node: ScreenNode, rect: Rect, target: ScreenNode) -> Rect | None:
    """
    Retorna la region asignada al nodo *target* (por identidad).

    Funciona tanto para hojas como para nodos Internal. None si el
    nodo no esta en el arbol.
    """
    if node is target:
        return rect
    if isinstance(node, Leaf):
        return None

    first, second = rect.split_half(node.is_vertical)
    found = find_rect(node.left, first, target)
    if found is not None:
        return found
    return find_rect(node.right, second, target)

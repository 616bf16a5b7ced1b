"""
bsptile.tiling.node - Nodos del arbol BSP.

El layout completo es un arbol binario de dos tipos de nodo:

    - Leaf     : un tile ocupado, con su color.
    - Internal : una particion en dos mitades (left/right), vertical
                 (columnas izquierda/derecha) u horizontal (filas
                 superior/inferior).

Los nodos son inmutables y su igualdad es por identidad: dos hojas con
el mismo color NO son el mismo tile. Las operaciones de reescritura
(bsptile.tiling.rewrite) buscan el nodo destino con `is`.

El arbol no guarda geometria; el walker la deriva en cada pasada.

Esquema de Internal(Leaf A, Internal(Leaf B, Leaf C, False), True):
    +-----+-----+
    |     |  B  |
    |  A  +-----+
    |     |  C  |
    +-----+-----+
"""

from __future__ import annotations

import random
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from bsptile.tiling.color import Color, random_color, to_hex


@dataclass(frozen=True, slots=True, eq=False)
class Leaf:
    """Tile ocupado."""

    color: Color

    def __repr__(self) -> str:
        return f"Leaf({to_hex(self.color)})"


@dataclass(frozen=True, slots=True, eq=False)
class Internal:
    """
    Particion de una region en dos hijos.

    Atributos:
        left:        Primer hijo (izquierda si es vertical, arriba si no).
        right:       Segundo hijo (derecha si es vertical, abajo si no).
        is_vertical: True = corte vertical (ancho a la mitad),
                     False = corte horizontal (alto a la mitad).
    """

    left: ScreenNode
    right: ScreenNode
    is_vertical: bool

    def __repr__(self) -> str:
        return f"Internal({self.left!r}, {self.right!r}, {self.is_vertical})"


ScreenNode = Union[Leaf, Internal]


def initial_root(rng: random.Random | None = None) -> Leaf:
    """Arbol inicial: un unico tile con color aleatorio."""
    return Leaf(random_color(rng))


# ============================================================================
# Inspeccion (solo lectura)
# ============================================================================

def iter_leaves(node: ScreenNode) -> Iterator[Leaf]:
    """Recorre las hojas de izquierda a derecha (arriba a abajo)."""
    if isinstance(node, Leaf):
        yield node
        return
    yield from iter_leaves(node.left)
    yield from iter_leaves(node.right)


def leaf_count(node: ScreenNode) -> int:
    if isinstance(node, Leaf):
        return 1
    return leaf_count(node.left) + leaf_count(node.right)


def depth(node: ScreenNode) -> int:
    """Profundidad del arbol; una hoja sola tiene profundidad 0."""
    if isinstance(node, Leaf):
        return 0
    return 1 + max(depth(node.left), depth(node.right))


def contains(node: ScreenNode, target: ScreenNode) -> bool:
    """True si *target* (por identidad) esta en el subarbol de *node*."""
    if node is target:
        return True
    if isinstance(node, Leaf):
        return False
    return contains(node.left, target) or contains(node.right, target)


def same_shape(a: ScreenNode, b: ScreenNode) -> bool:
    """
    Comparacion estructural: misma forma, orientaciones y colores.

    A diferencia de `==` (identidad), dos arboles construidos por
    separado con el mismo contenido son iguales aqui.
    """
    if isinstance(a, Leaf) and isinstance(b, Leaf):
        return a.color == b.color
    if isinstance(a, Internal) and isinstance(b, Internal):
        return (
            a.is_vertical == b.is_vertical
            and same_shape(a.left, b.left)
            and same_shape(a.right, b.right)
        )
    return False


def describe(node: ScreenNode) -> str:
    """Forma compacta de una linea, ej. 'V(L(#ff0000), L(#00ff00))'."""
    if isinstance(node, Leaf):
        return f"L({to_hex(node.color)})"
    tag = "V" if node.is_vertical else "H"
    return f"{tag}({describe(node.left)}, {describe(node.right)})"

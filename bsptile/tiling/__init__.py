"""
bsptile.tiling - Motor de layout BSP.

Este paquete contiene:
    - rect    : Estructura Rect para geometria de areas
    - color   : Colores aleatorios de los tiles y el color vacio
    - node    : Nodos del arbol (Leaf / Internal) e inspeccion
    - walker  : Calculo de la region de cada hoja y hit-testing
    - rewrite : split / remove_node / insert_relative
    - monitor : Canvas desde el monitor primario (solo Windows, no se
                importa aqui)
"""

from bsptile.tiling.rect import Rect
from bsptile.tiling.color import EMPTY_COLOR, Color, random_color
from bsptile.tiling.node import (
    Internal,
    Leaf,
    ScreenNode,
    initial_root,
    iter_leaves,
    leaf_count,
    same_shape,
)
from bsptile.tiling.walker import walk, layout, leaf_at, find_rect
from bsptile.tiling.rewrite import (
    InsertPosition,
    split,
    remove_node,
    insert_relative,
)

__all__ = [
    "Rect",
    "Color",
    "EMPTY_COLOR",
    "random_color",
    "Leaf",
    "Internal",
    "ScreenNode",
    "initial_root",
    "iter_leaves",
    "leaf_count",
    "same_shape",
    "walk",
    "layout",
    "leaf_at",
    "find_rect",
    "InsertPosition",
    "split",
    "remove_node",
    "insert_relative",
]

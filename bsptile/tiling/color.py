"""
bsptile.tiling.color - Colores de los tiles.

Cada tile nuevo recibe un color RGB aleatorio. El color es opaco para
el arbol: solo se compara y se copia al mover un tile.
"""

from __future__ import annotations

import random

Color = tuple[int, int, int]

# Color reservado para el tile vacio que queda al cerrar el ultimo tile
EMPTY_COLOR: Color = (255, 255, 255)


def random_color(rng: random.Random | None = None) -> Color:
    """
    Genera un color con tres canales independientes uniformes en 0-255.

    Args:
        rng: Generador a usar. Si es None, usa el modulo random global.
    """
    source = rng if rng is not None else random
    return (source.randint(0, 255), source.randint(0, 255), source.randint(0, 255))


def to_hex(color: Color) -> str:
    """
    (255, 0, 16) -> '#ff0010'.

    El color es opaco para el arbol: cualquier otro valor (ej. "red")
    se muestra con repr().
    """
    if (
        isinstance(color, tuple)
        and len(color) == 3
        and all(isinstance(c, int) for c in color)
    ):
        r, g, b = color
        return f"#{r:02x}{g:02x}{b:02x}"
    return repr(color)


def parse_hex(text: str) -> Color:
    """
    Convierte '#rrggbb' (o 'rrggbb') en una tupla RGB.

    Raises:
        ValueError: Si el texto no tiene exactamente 6 digitos hex.
    """
    raw = text.strip().lstrip("#")
    if len(raw) != 6:
        raise ValueError(f"Invalid color {text!r}: expected #rrggbb")
    try:
        return (int(raw[:2], 16), int(raw[2:4], 16), int(raw[4:], 16))
    except ValueError:
        raise ValueError(f"Invalid color {text!r}: expected #rrggbb") from None

"""
bsptile.tiling.rect - Estructura geometrica Rect.

Define un rectangulo inmutable que representa un area del canvas.
El walker lo usa para describir la region asignada a cada nodo del
arbol BSP, y el controlador para el hit-testing del puntero.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Rect:
    """
    Rectangulo inmutable definido por posicion (x, y) y dimensiones (w, h).

    Todas las coordenadas son enteras (pixeles). El origen (0, 0) es la
    esquina superior-izquierda del canvas.

    Atributos:
        x: Coordenada horizontal de la esquina superior-izquierda.
        y: Coordenada vertical de la esquina superior-izquierda.
        w: Ancho en pixeles.
        h: Alto en pixeles.
    """

    x: int
    y: int
    w: int
    h: int

    # ------------------------------------------------------------------
    # Propiedades derivadas
    # ------------------------------------------------------------------
    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    @property
    def center_x(self) -> float:
        return self.x + self.w / 2

    @property
    def center_y(self) -> float:
        return self.y + self.h / 2

    @property
    def area(self) -> int:
        return self.w * self.h

    # ------------------------------------------------------------------
    # Operaciones geometricas
    # ------------------------------------------------------------------
    def split_half(self, is_vertical: bool) -> tuple[Rect, Rect]:
        """
        Divide el rectangulo exactamente a la mitad.

        Con is_vertical=True el corte es vertical (columna izquierda /
        derecha); con False es horizontal (fila superior / inferior).
        La primera mitad recibe el piso de la division y la segunda el
        resto, asi ambas suman siempre la dimension original.

        Returns:
            Tupla (primera, segunda).
        """
        if is_vertical:
            left_w = self.w // 2
            return (
                Rect(self.x, self.y, left_w, self.h),
                Rect(self.x + left_w, self.y, self.w - left_w, self.h),
            )

        top_h = self.h // 2
        return (
            Rect(self.x, self.y, self.w, top_h),
            Rect(self.x, self.y + top_h, self.w, self.h - top_h),
        )

    def pad(self, gap: int) -> Rect:
        """
        Reduce el rectangulo aplicando un margen interior (gap) uniforme.

        Args:
            gap: Pixeles de margen en cada lado.

        Returns:
            Nuevo Rect reducido. Si el gap es mayor que las dimensiones,
            retorna un Rect de tamano 0.
        """
        new_w = max(0, self.w - 2 * gap)
        new_h = max(0, self.h - 2 * gap)
        return Rect(self.x + gap, self.y + gap, new_w, new_h)

    def contains(self, px: float, py: float) -> bool:
        """True si el punto cae dentro (borde derecho/inferior excluido)."""
        return self.left <= px < self.right and self.top <= py < self.bottom

    def intersection_area(self, other: Rect) -> int:
        """Area compartida con *other* (0 si no se solapan)."""
        w = min(self.right, other.right) - max(self.left, other.left)
        h = min(self.bottom, other.bottom) - max(self.top, other.top)
        if w <= 0 or h <= 0:
            return 0
        return w * h

    # ------------------------------------------------------------------
    # Conversion desde tupla Win32 (left, top, right, bottom)
    # ------------------------------------------------------------------
    @classmethod
    def from_ltrb(cls, left: int, top: int, right: int, bottom: int) -> Rect:
        """Crea un Rect desde coordenadas (left, top, right, bottom)."""
        return cls(left, top, right - left, bottom - top)

    # ------------------------------------------------------------------
    # Representacion
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return f"Rect({self.w}x{self.h}+{self.x}+{self.y})"

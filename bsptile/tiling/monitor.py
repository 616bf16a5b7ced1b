"""
bsptile.tiling.monitor - Canvas a partir del monitor primario.

Solo Windows: usa win32api de pywin32 para leer el area de trabajo
(sin taskbar) o el area completa del monitor primario, y la entrega
como el Rect raiz sobre el que se calcula el layout BSP.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import win32api
import win32con

from bsptile.tiling.rect import Rect

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Monitor:
    """
    Monitor fisico.

    Atributos:
        name:       Nombre del dispositivo (ej. r'\\\\.\\DISPLAY1').
        full_rect:  Resolucion completa.
        work_rect:  Area de trabajo (descontando taskbar y barras).
        is_primary: True si es el monitor principal.
    """

    name: str
    full_rect: Rect
    work_rect: Rect
    is_primary: bool = False


def get_monitors() -> list[Monitor]:
    """Enumera los monitores; el primario primero, luego por nombre."""
    monitors: list[Monitor] = []

    for hmonitor, _hdc, _rect in win32api.EnumDisplayMonitors(None, None):
        try:
            info = win32api.GetMonitorInfo(hmonitor)
        except Exception:
            log.warning("No se pudo obtener info del monitor %s", hmonitor)
            continue

        monitors.append(
            Monitor(
                name=info["Device"],
                full_rect=Rect.from_ltrb(*info["Monitor"]),
                work_rect=Rect.from_ltrb(*info["Work"]),
                is_primary=bool(info["Flags"] & win32con.MONITORINFOF_PRIMARY),
            )
        )

    monitors.sort(key=lambda m: (not m.is_primary, m.name))
    log.debug("Monitores detectados: %s", [m.name for m in monitors])
    return monitors


def get_canvas(work_area: bool = True) -> Rect:
    """
    Canvas del monitor primario.

    Args:
        work_area: True para el area de trabajo, False para la
                   resolucion completa.

    Raises:
        RuntimeError: Si no se detecta ningun monitor.
    """
    monitors = get_monitors()
    if not monitors:
        raise RuntimeError("No se detectaron monitores en el sistema")

    primary = monitors[0]
    canvas = primary.work_rect if work_area else primary.full_rect
    log.info("Canvas desde %s: %s", primary.name, canvas)
    return canvas

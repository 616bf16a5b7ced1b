"""
bsptile.core - Interaction layer on top of the BSP layout engine.

This package contains:
    - controller : TileController - drag state machine and button actions
    - commands   : CommandDispatcher - named text commands for the controller
"""

from bsptile.core.controller import DragState, TileController, classify_position
from bsptile.core.commands import (
    Command,
    CommandDispatcher,
    CommandError,
    build_default_commands,
)

__all__ = [
    "DragState", "TileController", "classify_position",
    "Command", "CommandDispatcher", "CommandError", "build_default_commands",
]

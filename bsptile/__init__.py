"""
bsptile - Binary space partitioning layout engine for a tiling window manager.
"""

__version__ = "0.1.0"

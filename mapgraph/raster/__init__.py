"""
Tile selection for the map viewer
"""

from .rasterer import Rasterer

__all__ = ["Rasterer"]

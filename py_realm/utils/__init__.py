"""
Utility helpers shared by the realm modules.
"""

from .geometry import distance_between, distances_to, truncated_distance

__all__ = ["distance_between", "distances_to", "truncated_distance"]

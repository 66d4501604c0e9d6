"""API routes package"""

from . import meals, favorites, analytics, goal, nutrition, health

__all__ = ["meals", "favorites", "analytics", "goal", "nutrition", "health"]

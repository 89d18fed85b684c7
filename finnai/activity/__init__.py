"""Activity logging package."""

from finnai.activity.logger import ActivityLogger

__all__ = ["ActivityLogger"]

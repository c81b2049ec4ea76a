"""Service layer for ytupload."""

from .base import BaseService
from .videos import VideoService

__all__ = [
    "BaseService",
    "VideoService",
]

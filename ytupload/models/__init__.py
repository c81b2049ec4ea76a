"""Data models for ytupload.

Provides Pydantic models for video metadata and parsed video entries.
"""

from __future__ import annotations

from .base import BaseModel
from .video import UploadOptions, Video, VideoMetadata

__all__ = [
    "BaseModel",
    "UploadOptions",
    "Video",
    "VideoMetadata",
]

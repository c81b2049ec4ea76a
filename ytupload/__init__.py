"""ytupload - a client for the YouTube GData upload API.

This package uploads videos with their metadata, and updates or deletes
previously uploaded videos:
- ClientLogin authentication, cached per client
- Streaming multipart/related upload bodies with a precomputed length
- Typed errors built from the server's fault documents
"""

__version__ = "0.1.0"

from ytupload.core.client import YouTubeClient
from ytupload.core.config import Config, Profile
from ytupload.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConnectionError,
    NetworkError,
    UploadError,
    ValidationError,
    YTUploadError,
)
from ytupload.models.video import UploadOptions, Video, VideoMetadata
from ytupload.services.videos import VideoService

__all__ = [
    "__version__",
    "YouTubeClient",
    "VideoService",
    "Config",
    "Profile",
    "UploadOptions",
    "Video",
    "VideoMetadata",
    "YTUploadError",
    "AuthenticationError",
    "ConfigurationError",
    "ConnectionError",
    "NetworkError",
    "UploadError",
    "ValidationError",
]

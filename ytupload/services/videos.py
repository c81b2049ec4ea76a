"""Video service: upload, update and delete videos in a user's upload feed."""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from contextlib import ExitStack
from typing import TYPE_CHECKING, Any, Union

import pydantic

from ytupload.core.envelope import build_video_xml
from ytupload.core.exceptions import UploadError, ValidationError, YTUploadError
from ytupload.core.logging import LogContext, get_audit_logger
from ytupload.core.responses import extract_video_id
from ytupload.models.video import UploadOptions, Video, VideoMetadata
from ytupload.uploaders.common import Payload, derive_filename
from ytupload.uploaders.constants import BOUNDARY
from ytupload.uploaders.multipart import build_upload_body

from .base import BaseService

if TYPE_CHECKING:
    from ytupload.core.client import YouTubeClient

logger = logging.getLogger(__name__)

ATOM_CONTENT_TYPE = "application/atom+xml"

UploadSource = Union[Payload, str, "os.PathLike[str]"]


def _validation_error(exc: pydantic.ValidationError) -> ValidationError:
    first = exc.errors()[0]
    field = ".".join(str(loc) for loc in first.get("loc", ()))
    return ValidationError(f"Invalid video metadata: {first.get('msg')}", field=field or None)


class VideoService(BaseService):
    """Upload, update and delete videos.

    Each call is one blocking request/response exchange. The first call on a
    client triggers the ClientLogin round trip.
    """

    def __init__(self, client: "YouTubeClient") -> None:
        super().__init__(client)
        self.audit = get_audit_logger()

    # =========================================================================
    # Upload
    # =========================================================================

    def upload(
        self,
        payload: UploadSource,
        options: UploadOptions | dict[str, Any] | None = None,
        **overrides: Any,
    ) -> str:
        """Upload a video.

        Args:
            payload: Video bytes, a binary file handle, or a path. Handles are
                borrowed and left open; paths are opened and closed here.
            options: Metadata and upload settings; unset fields take defaults
                (``video/mp4``, empty title/description/category/keywords).
            **overrides: Individual option fields, applied on top of options.

        Returns:
            ID of the new video.

        Raises:
            ValidationError: If the options are malformed.
            ConfigurationError: If the payload's size cannot be determined.
            AuthenticationError: If the credentials are rejected.
            UploadError: If the server rejects the upload.
        """
        opts = self._upload_options(options, overrides)
        filename = opts.filename or derive_filename(payload)

        with LogContext(
            "upload", logger, user=self.client.username, filename=filename
        ) as ctx, ExitStack() as stack:
            if isinstance(payload, (str, os.PathLike)):
                payload = stack.enter_context(open(payload, "rb"))

            body = build_upload_body(build_video_xml(opts), payload, opts.mime_type)
            ctx.debug("Sending %d bytes", len(body))

            try:
                resp = self._request(
                    "upload",
                    "POST",
                    self.client.uploads_path(),
                    host=self.client.uploads_host,
                    extra_headers={
                        "Slug": filename,
                        "Content-Type": f"multipart/related; boundary={BOUNDARY}",
                        "Content-Length": str(len(body)),
                    },
                    body=body,
                )
                video_id = extract_video_id(resp.text)
            except YTUploadError as e:
                self.audit.log_operation(
                    "upload",
                    user=self.client.username,
                    filename=filename,
                    error=str(e),
                )
                raise

        self.audit.log_operation(
            "upload", user=self.client.username, video_id=video_id, filename=filename
        )
        return video_id

    def _upload_options(
        self,
        options: UploadOptions | dict[str, Any] | None,
        overrides: dict[str, Any],
    ) -> UploadOptions:
        if isinstance(options, UploadOptions):
            data = options.model_dump(exclude_unset=True)
        else:
            data = dict(options or {})
        data.update(overrides)
        try:
            return UploadOptions.model_validate(data)
        except pydantic.ValidationError as e:
            raise _validation_error(e) from e

    # =========================================================================
    # Update
    # =========================================================================

    def update(self, video_id: str, metadata: VideoMetadata | dict[str, Any]) -> Video:
        """Replace the metadata of an uploaded video.

        Unlike upload, nothing is defaulted: title, description, category
        and keywords must all be supplied.

        Args:
            video_id: Video to update.
            metadata: Complete metadata.

        Returns:
            The updated video as returned by the server.

        Raises:
            ValidationError: If metadata is incomplete or video_id is empty.
            AuthenticationError: If the credentials are rejected.
            UploadError: If the server rejects the update.
        """
        self._require_video_id(video_id)
        if not isinstance(metadata, VideoMetadata):
            try:
                metadata = VideoMetadata.model_validate(metadata)
            except pydantic.ValidationError as e:
                raise _validation_error(e) from e

        body = build_video_xml(metadata).encode("utf-8")

        with LogContext("update", logger, user=self.client.username, video_id=video_id):
            try:
                resp = self._request(
                    "update",
                    "PUT",
                    self.client.uploads_path(video_id),
                    extra_headers={
                        "Content-Type": ATOM_CONTENT_TYPE,
                        "Content-Length": str(len(body)),
                    },
                    body=body,
                )
                try:
                    video = Video.from_xml(resp.text)
                except (ET.ParseError, pydantic.ValidationError) as e:
                    raise UploadError(
                        f"Update response is not a video entry: {e}", operation="update"
                    ) from e
            except YTUploadError as e:
                self.audit.log_operation(
                    "update",
                    user=self.client.username,
                    video_id=video_id,
                    error=str(e),
                )
                raise

        self.audit.log_operation("update", user=self.client.username, video_id=video_id)
        return video

    # =========================================================================
    # Delete
    # =========================================================================

    def delete(self, video_id: str) -> bool:
        """Delete an uploaded video.

        Args:
            video_id: Video to delete.

        Returns:
            True once the server has accepted the deletion.

        Raises:
            ValidationError: If video_id is empty.
            AuthenticationError: If the credentials are rejected.
            UploadError: If the server rejects the deletion.
        """
        self._require_video_id(video_id)

        with LogContext("delete", logger, user=self.client.username, video_id=video_id):
            try:
                self._request(
                    "delete",
                    "DELETE",
                    self.client.uploads_path(video_id),
                    extra_headers={
                        "Content-Type": ATOM_CONTENT_TYPE,
                        "Content-Length": "0",
                    },
                    body=b"",
                )
            except YTUploadError as e:
                self.audit.log_operation(
                    "delete",
                    user=self.client.username,
                    video_id=video_id,
                    error=str(e),
                )
                raise

        self.audit.log_operation("delete", user=self.client.username, video_id=video_id)
        return True

    @staticmethod
    def _require_video_id(video_id: str) -> None:
        if not video_id or "/" in video_id:
            raise ValidationError("Invalid video id", field="video_id", value=video_id)

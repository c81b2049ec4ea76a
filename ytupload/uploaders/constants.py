"""Shared constants for the upload body builders."""

# Fixed multipart boundary. Payload bytes are never scanned for it.
BOUNDARY = "An43094fu"

DEFAULT_MIME_TYPE = "video/mp4"

# Bytes handed to the HTTP layer per chunk. Large on purpose: small chunks
# make multi-gigabyte uploads CPU bound.
DEFAULT_CHUNK_SIZE = 1024 * 1024

# Leading bytes of a stream hashed to derive a Slug
FILENAME_PEEK_BYTES = 1024

ENTRY_CONTENT_TYPE = "application/atom+xml; charset=UTF-8"

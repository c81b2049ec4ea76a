"""Shared HTTP timeout defaults."""

# Video uploads can take hours on slow links
DEFAULT_HTTP_TIMEOUT_SECONDS = 21600

# ClientLogin is a single small form post
DEFAULT_AUTH_TIMEOUT_SECONDS = 30

from __future__ import annotations


class S3NavError(Exception):
    """Base exception for s3nav errors."""


class ListingError(S3NavError):
    """Raised when a prefix listing cannot be fetched from S3."""

    def __init__(self, bucket: str, prefix: str, reason: str) -> None:
        super().__init__(f"Could not list s3://{bucket}/{prefix}: {reason}")
        self.bucket = bucket
        self.prefix = prefix
        self.reason = reason


class ClipboardError(S3NavError):
    """Raised when no system clipboard accepted the text."""


class ConfigError(S3NavError):
    """Raised when the config file holds an invalid value."""

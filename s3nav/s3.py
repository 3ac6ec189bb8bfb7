from __future__ import annotations

import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .entries import Entry
from .errors import ListingError

DEFAULT_MAX_KEYS = 200

logger = logging.getLogger(__name__)


class S3Service:
    def __init__(
        self,
        profile: Optional[str] = None,
        region: Optional[str] = None,
        max_keys: int = DEFAULT_MAX_KEYS,
    ) -> None:
        self.profile = None if profile == "default" else profile
        self._region = region
        self._max_keys = max(1, int(max_keys))
        self._s3_client = None

    def _client(self):
        if self._s3_client is not None:
            return self._s3_client
        if self.profile is None:
            session = boto3.session.Session()
        else:
            session = boto3.session.Session(profile_name=self.profile)
        if self._region:
            client = session.client("s3", region_name=self._region)
        else:
            client = session.client("s3")
        self._s3_client = client
        return client

    def list(self, bucket: str, prefix: str) -> list[Entry]:
        logger.debug("Listing s3://%s/%s", bucket, prefix)
        try:
            client = self._client()
            response = client.list_objects_v2(
                Bucket=bucket,
                Prefix=prefix,
                Delimiter="/",
                MaxKeys=self._max_keys,
            )
        except ClientError as exc:
            error = exc.response.get("Error", {})
            reason = error.get("Message") or error.get("Code") or str(exc)
            raise ListingError(bucket, prefix, reason) from exc
        except BotoCoreError as exc:
            raise ListingError(bucket, prefix, str(exc)) from exc
        entries = self._entries_from_response(response, prefix)
        if response.get("IsTruncated"):
            logger.warning(
                "Listing of s3://%s/%s truncated at %d keys",
                bucket,
                prefix,
                self._max_keys,
            )
        return entries

    def _entries_from_response(self, response: dict, prefix: str) -> list[Entry]:
        entries: list[Entry] = []
        for item in response.get("CommonPrefixes", []):
            value = item.get("Prefix")
            if value:
                entries.append(Entry.directory(value))
        for item in response.get("Contents", []):
            key = item.get("Key")
            if not key:
                continue
            # Zero-byte marker object for the prefix itself.
            if prefix and key == prefix:
                continue
            entries.append(
                Entry.file(
                    key,
                    size=int(item.get("Size", 0)),
                    last_modified=item.get("LastModified"),
                )
            )
        return entries

from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from docingest.storage.base import BaseObjectStore
from docingest.storage.exceptions import ObjectNotFoundError, TransientIOError

_MISSING_KEY_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


class S3ObjectStore(BaseObjectStore):
    """Fetches uploaded files from an S3 bucket."""

    def __init__(self, client: Any, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    def fetch(self, storage_key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=storage_key)
            body = response["Body"]
            try:
                return body.read()
            finally:
                body.close()
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _MISSING_KEY_CODES:
                raise ObjectNotFoundError(
                    f"Object not found: s3://{self._bucket}/{storage_key}"
                ) from exc
            raise TransientIOError(f"S3 request failed ({code}): {exc}") from exc
        except BotoCoreError as exc:
            raise TransientIOError(f"S3 network error: {exc}") from exc

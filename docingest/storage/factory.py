from pathlib import Path

import boto3
from botocore.config import Config

from docingest.config.settings import Settings
from docingest.storage.base import BaseObjectStore
from docingest.storage.local_file_store import LocalFileStore
from docingest.storage.s3_object_store import S3ObjectStore


class ObjectStoreFactory:
    """Creates the configured object store."""

    @classmethod
    def create(cls, settings: Settings) -> BaseObjectStore:
        backend = settings.storage_backend.lower()
        if backend == "local":
            return LocalFileStore(Path(settings.files_root))
        if backend == "s3":
            if not settings.s3_bucket:
                raise ValueError("s3_bucket is required for storage_backend=s3")
            return S3ObjectStore(cls._build_s3_client(settings), settings.s3_bucket)
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: ['local', 's3']"
        )

    @staticmethod
    def _build_s3_client(settings: Settings) -> object:
        config = Config(
            connect_timeout=settings.storage_timeout_seconds,
            read_timeout=settings.storage_timeout_seconds,
            retries={"max_attempts": 2, "mode": "standard"},
        )
        return boto3.client(
            "s3",
            region_name=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
            config=config,
        )

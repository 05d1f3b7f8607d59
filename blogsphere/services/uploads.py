from __future__ import annotations

import logging
import os
import secrets
import time
from typing import Any

import boto3
from botocore.config import Config


logger = logging.getLogger(__name__)


def get_upload_bucket() -> str:
    return os.getenv("UPLOAD_BUCKET", "mern-blogging-website-bucket")


def get_upload_expiry_seconds() -> int:
    try:
        return int(os.getenv("UPLOAD_URL_EXPIRES", "1000"))
    except Exception:
        return 1000


def make_s3_client() -> Any:
    return boto3.client(
        "s3",
        region_name=os.getenv("AWS_REGION", "ap-south-1"),
        config=Config(signature_version="s3v4"),
    )


class UploadBroker:
    """Hands out pre-signed PUT URLs for JPEG images. Uploaded bytes are never inspected."""

    def __init__(self, s3: Any | None = None, bucket: str | None = None, expires: int | None = None) -> None:
        self.s3 = s3 if s3 is not None else make_s3_client()
        self.bucket = bucket or get_upload_bucket()
        self.expires = expires if expires is not None else get_upload_expiry_seconds()

    @staticmethod
    def new_key() -> str:
        return f"{secrets.token_urlsafe(16)}-{int(time.time() * 1000)}.jpeg"

    def get_upload_url(self) -> str:
        key = self.new_key()
        url = self.s3.generate_presigned_url(
            "put_object",
            Params={"Bucket": self.bucket, "Key": key, "ContentType": "image/jpeg"},
            ExpiresIn=self.expires,
        )
        logger.info("issued upload url for %s/%s", self.bucket, key)
        return url


_broker: UploadBroker | None = None


def get_upload_broker() -> UploadBroker:
    global _broker
    if _broker is None:
        _broker = UploadBroker()
    return _broker

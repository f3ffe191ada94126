from __future__ import annotations

import logging
from pathlib import Path
from uuid import uuid4

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile

from ecommerce_portal.core import config
from ecommerce_portal.core.errors import StorageError

logger = logging.getLogger(__name__)
STORAGE_PREFIX = "[STORAGE]"


def _get_required_setting(name: str, value: str) -> str:
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _get_spaces_client():
    return boto3.client(
        "s3",
        endpoint_url=_get_required_setting("SPACES_ENDPOINT_URL", config.SPACES_ENDPOINT_URL),
        aws_access_key_id=_get_required_setting("SPACES_ACCESS_KEY_ID", config.SPACES_ACCESS_KEY_ID),
        aws_secret_access_key=_get_required_setting("SPACES_SECRET_ACCESS_KEY", config.SPACES_SECRET_ACCESS_KEY),
        region_name=config.SPACES_REGION or None,
    )


def _bucket() -> str:
    return _get_required_setting("SPACES_BUCKET_NAME", config.SPACES_BUCKET_NAME)


def _sanitize_key_part(part) -> str:
    return str(part).strip().strip("/")


def build_object_key(category: str, owner_id, filename: str) -> str:
    return "/".join(
        [_sanitize_key_part(category), _sanitize_key_part(owner_id), _sanitize_key_part(filename)]
    )


def filename_from_key(key: str) -> str:
    return key.rsplit("/", 1)[-1]


def public_url(key: str | None) -> str | None:
    if not key:
        return None
    if not config.SPACES_PUBLIC_URL:
        return key
    return f"{config.SPACES_PUBLIC_URL}/{key}"


def upload_file(file: UploadFile, owner_id, category: str) -> str:
    """Upload ``file`` under ``{category}/{owner_id}/`` and return its object key."""
    extension = Path(file.filename or "").suffix.lower()
    object_key = build_object_key(category, owner_id, f"{uuid4().hex}{extension}")

    extra_args = {}
    if config.SPACES_OBJECT_ACL:
        extra_args["ACL"] = config.SPACES_OBJECT_ACL
    if getattr(file, "content_type", None):
        extra_args["ContentType"] = file.content_type

    file.file.seek(0)
    try:
        _get_spaces_client().upload_fileobj(file.file, _bucket(), object_key, ExtraArgs=extra_args)
    except (BotoCoreError, ClientError) as exc:
        logger.exception("%s upload failed key=%s", STORAGE_PREFIX, object_key)
        raise StorageError("Failed uploading the file to storage.") from exc

    logger.info("%s uploaded key=%s", STORAGE_PREFIX, object_key)
    return object_key


def remove_file(key: str) -> None:
    try:
        _get_spaces_client().delete_object(Bucket=_bucket(), Key=key)
    except (BotoCoreError, ClientError) as exc:
        logger.exception("%s delete failed key=%s", STORAGE_PREFIX, key)
        raise StorageError("Failed removing the file from storage.") from exc
    logger.info("%s removed key=%s", STORAGE_PREFIX, key)


def rename_folder(category: str, old_owner_id, new_owner_id, filename: str) -> str:
    """Move ``{category}/{old}/{filename}`` to ``{category}/{new}/{filename}``.

    S3 has no rename, so the object is copied server side and the source is
    deleted. The filename segment never changes.
    """
    old_key = build_object_key(category, old_owner_id, filename)
    new_key = build_object_key(category, new_owner_id, filename)
    if old_key == new_key:
        return old_key

    bucket = _bucket()
    client = _get_spaces_client()
    copy_kwargs = {
        "Bucket": bucket,
        "CopySource": {"Bucket": bucket, "Key": old_key},
        "Key": new_key,
    }
    if config.SPACES_OBJECT_ACL:
        copy_kwargs["ACL"] = config.SPACES_OBJECT_ACL

    try:
        client.copy_object(**copy_kwargs)
        client.delete_object(Bucket=bucket, Key=old_key)
    except (BotoCoreError, ClientError) as exc:
        logger.exception("%s rename failed old_key=%s new_key=%s", STORAGE_PREFIX, old_key, new_key)
        raise StorageError("Failed relocating the file in storage.") from exc

    logger.info("%s renamed old_key=%s new_key=%s", STORAGE_PREFIX, old_key, new_key)
    return new_key

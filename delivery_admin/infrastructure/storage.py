"""Azure Blob Storage access for push notification images."""

from __future__ import annotations

import uuid
from functools import lru_cache
from pathlib import PurePosixPath
from typing import Optional
from urllib.parse import unquote, urlparse

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import ContainerClient, ContentSettings

from delivery_admin.config import get_settings

PUSH_NOTIFICATION_IMAGE_FOLDER = "PushNotificationImages"


@lru_cache
def _get_container_client() -> ContainerClient:
    """Return the image container, creating it with public blob access on first use.

    Raises ``RuntimeError`` while storage is not configured.
    """

    settings = get_settings()
    if not settings.azure_storage_connection_string:
        raise RuntimeError("Azure storage connection string is not configured")
    if not settings.azure_storage_container_name:
        raise RuntimeError("Azure storage container name is not configured")

    container_client = ContainerClient.from_connection_string(
        settings.azure_storage_connection_string,
        settings.azure_storage_container_name,
    )
    try:
        container_client.create_container(public_access="blob")
    except ResourceExistsError:
        pass
    return container_client


def upload_image(
    data: bytes,
    filename: str,
    *,
    folder: str = PUSH_NOTIFICATION_IMAGE_FOLDER,
    content_type: Optional[str] = None,
) -> str:
    """Store ``data`` under a random name in ``folder`` and return its public URL."""

    suffix = PurePosixPath(filename or "").suffix.lower()
    blob_client = _get_container_client().get_blob_client(
        f"{folder}/{uuid.uuid4().hex}{suffix}"
    )
    blob_client.upload_blob(
        data,
        overwrite=True,
        content_settings=ContentSettings(content_type=content_type) if content_type else None,
    )
    return blob_client.url


def delete_image(url: str) -> None:
    """Delete the blob behind ``url``. URLs outside the container are ignored."""

    container_client = _get_container_client()
    blob_path = blob_path_from_url(url, container_client.container_name)
    if blob_path is None:
        return
    try:
        container_client.delete_blob(blob_path)
    except ResourceNotFoundError:
        return


def blob_path_from_url(url: str | None, container_name: str) -> str | None:
    """Return the blob name of ``url`` inside ``container_name``, if it lives there."""

    if not url:
        return None
    path = unquote(urlparse(url).path).lstrip("/")
    prefix = f"{container_name}/"
    if not path.startswith(prefix):
        return None
    return path[len(prefix):] or None


__all__ = [
    "PUSH_NOTIFICATION_IMAGE_FOLDER",
    "blob_path_from_url",
    "delete_image",
    "upload_image",
]

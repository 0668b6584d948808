import random
from typing import Dict, Iterable, List, Optional

from django.core.files.storage import Storage, default_storage
from django.utils.text import get_valid_filename

from core.logging import configure_logger

logger = configure_logger("catalog.storage")

StoredFile = Dict[str, str]


def generate_folder_id() -> str:
    return str(random.randint(100000, 999999))


class ImageStorage:
    """Uploads catalog images and destroys them by ``storage_id``."""

    def __init__(self, storage: Optional[Storage] = None) -> None:
        self.storage = storage or default_storage

    def upload_file(self, file, *, folder: str) -> StoredFile:
        file_name = get_valid_filename(getattr(file, "name", "") or "image")
        storage_id = self.storage.save(f"{folder.strip('/')}/{file_name}", file)
        return {"url": self.storage.url(storage_id), "storage_id": storage_id}

    def upload_files(self, files: Iterable, *, folder: str) -> List[StoredFile]:
        uploaded: List[StoredFile] = []
        try:
            for file in files:
                uploaded.append(self.upload_file(file, folder=folder))
        except Exception:
            logger.exception("Upload to %s failed; rolling back %d file(s)", folder, len(uploaded))
            self.destroy_files(uploaded)
            raise
        return uploaded

    def destroy_file(self, storage_id: str) -> None:
        if storage_id:
            self.storage.delete(storage_id)

    def destroy_files(self, attachments: Iterable[Optional[StoredFile]]) -> None:
        for attachment in attachments:
            if attachment and attachment.get("storage_id"):
                self.destroy_file(attachment["storage_id"])

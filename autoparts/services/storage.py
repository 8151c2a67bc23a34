"""
Local blob storage for uploaded documents.
"""
import logging
import uuid
from pathlib import Path, PurePosixPath

from autoparts.errors import StorageError

logger = logging.getLogger(__name__)


class LocalStorage:
    """
    Files live under ``root`` at ``{owner}/{uuid}.{ext}`` and are published
    under ``url_prefix``.
    """

    def __init__(self, root, url_prefix: str = "/media"):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def make_key(self, owner, filename: str) -> str:
        ext = PurePosixPath(filename or "").suffix.lower().lstrip(".")
        name = uuid.uuid4().hex
        if ext:
            name = f"{name}.{ext}"
        return f"{owner}/{name}"

    def path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root.resolve() not in path.parents:
            raise StorageError(f"Invalid storage key: {key}")
        return path

    def public_url(self, key: str) -> str:
        return f"{self.url_prefix}/{key}"

    def save(self, key: str, data: bytes) -> str:
        path = self.path_for(key)
        if path.exists():
            raise StorageError(f"File already exists: {key}")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Failed to store file: {e}") from e
        logger.info("Stored %s (%d bytes)", key, len(data))
        return self.public_url(key)

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Stored file %s was already gone", key)
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete file: {e}") from e
        logger.info("Deleted %s", key)
        return True


def get_storage() -> LocalStorage:
    """Dependency returning the configured document store."""
    from autoparts.config import get_settings

    settings = get_settings()
    return LocalStorage(settings.storage_dir, settings.storage_url_prefix)

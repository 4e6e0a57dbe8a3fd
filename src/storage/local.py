import os
from pathlib import Path

from src.utils.errors import StorageError
from .base import BaseStorage


class LocalStorage(BaseStorage):
    """
    Filesystem stand-in for the thumbnail bucket.

    Used for dry local runs; objects land under ``root`` and the returned URL
    is a ``file://`` URL.
    """

    def __init__(self, root: str = "data/thumbnails"):
        self.root = Path(root)

    def file_exist(self, filename: str) -> bool:
        return (self.root / filename).is_file()

    def get_public_url(self, filename: str) -> str:
        return (self.root / filename).resolve().as_uri()

    def save_file(self, filename: str, content: bytes, content_type: str) -> str:
        try:
            os.makedirs(self.root, exist_ok=True)
            with open(self.root / filename, "wb") as file:
                file.write(content)
        except OSError as e:
            raise StorageError(f"Error saving file to local storage: {e}") from e

        return self.get_public_url(filename)

from abc import ABC, abstractmethod


class BaseStorage(ABC):
    """
    Abstract base class for the thumbnail object store.

    Objects are written publicly readable; ``save_file`` returns the URL the
    object can be fetched from.
    """

    @abstractmethod
    def file_exist(self, filename: str) -> bool:
        """
        Check if an object exists.

        Args:
            filename (str): Object key.

        Returns:
            bool: True if the object exists, False otherwise.
        """

    @abstractmethod
    def save_file(self, filename: str, content: bytes, content_type: str) -> str:
        """Saves an object with public-read access.

        Args:
            filename (str): Object key (e.g. "<podcast id>.png").
            content (bytes): Object payload.
            content_type (str): MIME type of the payload.

        Returns:
            str: The public URL of the saved object.

        Raises:
            StorageError: If the upload fails.
        """
        pass

    @abstractmethod
    def get_public_url(self, filename: str) -> str:
        """Constructs the public URL of an object.

        Args:
            filename (str): Object key.

        Returns:
            str: The public URL.
        """
        pass

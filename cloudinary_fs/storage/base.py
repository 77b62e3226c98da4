# storage/base.py
from abc import ABC, abstractmethod
from typing import List, Optional, Union
from .dto import (
    DirectoryResult,
    FileMetadata,
    MimetypeResult,
    ReadResult,
    StreamResult,
)


class FilesystemAdapter(ABC):
    """
    Abstract base class for a filesystem adapter.
    Defines the operation set a generic file-storage layer expects from every
    storage backend. Failures on the standard paths are reported by returning
    False (or an empty list for listings) rather than by raising.
    """

    @abstractmethod
    def write(
        self, path: str, contents: bytes, config: Optional[dict] = None
    ) -> Union[FileMetadata, bool]:
        """
        Writes a new file.

        :param path: The path of the file to write.
        :param contents: The raw bytes to store.
        :param config: Write options supplied by the caller.
        :return: The metadata of the written file, or False on failure.
        """
        pass

    @abstractmethod
    def write_stream(self, path: str, resource, config: Optional[dict] = None):
        """
        Writes a new file from a stream.

        :param path: The path of the file to write.
        :param resource: An open binary stream.
        :param config: Write options supplied by the caller.
        """
        pass

    @abstractmethod
    def update(
        self, path: str, contents: bytes, config: Optional[dict] = None
    ) -> Union[FileMetadata, bool]:
        """
        Overwrites an existing file.

        :param path: The path of the file to update.
        :param contents: The new raw bytes.
        :param config: Write options supplied by the caller.
        :return: The metadata of the written file, or False on failure.
        """
        pass

    @abstractmethod
    def update_stream(self, path: str, resource, config: Optional[dict] = None):
        """
        Overwrites an existing file from a stream.

        :param path: The path of the file to update.
        :param resource: An open binary stream.
        :param config: Write options supplied by the caller.
        """
        pass

    @abstractmethod
    def rename(self, path: str, new_path: str) -> bool:
        """
        Renames a file.

        :param path: The current path of the file.
        :param new_path: The new path of the file.
        """
        pass

    @abstractmethod
    def copy(self, path: str, new_path: str, config: Optional[dict] = None) -> bool:
        """
        Copies a file.

        :param path: The path of the file to copy.
        :param new_path: The destination path.
        :param config: Write options used for the destination file.
        """
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        """
        Deletes a file.

        :param path: The path of the file to delete.
        """
        pass

    @abstractmethod
    def delete_directory(self, dirname: str) -> bool:
        """
        Deletes a directory.

        :param dirname: The path of the directory to delete.
        """
        pass

    @abstractmethod
    def create_directory(
        self, dirname: str, config: Optional[dict] = None
    ) -> Union[DirectoryResult, bool]:
        """
        Creates a directory.

        :param dirname: The path of the directory to create.
        :param config: Options supplied by the caller.
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> Optional[bool]:
        """
        Checks whether a file exists.

        :param path: The path of the file to check.
        """
        pass

    @abstractmethod
    def read(self, path: str) -> Union[ReadResult, bool]:
        """
        Reads a file.

        :param path: The path of the file to read.
        """
        pass

    @abstractmethod
    def read_stream(self, path: str) -> Union[StreamResult, bool]:
        """
        Reads a file as a stream.

        :param path: The path of the file to read.
        """
        pass

    @abstractmethod
    def list_contents(
        self, directory: str = "", recursive: bool = False
    ) -> List[FileMetadata]:
        """
        Lists the contents of a directory.

        :param directory: The directory (path prefix) to list.
        :param recursive: Whether to descend into subdirectories.
        :return: A list of standardized FileMetadata DTOs.
        """
        pass

    @abstractmethod
    def get_metadata(self, path: str) -> Union[FileMetadata, bool]:
        """
        Returns all known metadata of a file.

        :param path: The path of the file.
        """
        pass

    @abstractmethod
    def get_size(self, path: str) -> Union[FileMetadata, bool]:
        pass

    @abstractmethod
    def get_mimetype(self, path: str) -> Union[MimetypeResult, bool]:
        pass

    @abstractmethod
    def get_timestamp(self, path: str) -> Union[FileMetadata, bool]:
        pass

    @abstractmethod
    def get_visibility(self, path: str):
        pass

    @abstractmethod
    def set_visibility(self, path: str, visibility: str):
        pass

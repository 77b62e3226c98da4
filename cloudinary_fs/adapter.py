# adapter.py
import logging
import tempfile
from typing import List, Optional, Union

import magic
import requests
from cloudinary.exceptions import Error as ApiError, NotFound

from .client import CloudinaryClient
from .events import ResponseObserver, log_response, notify_response
from .exceptions import UnsupportedOperationError
from .storage.base import FilesystemAdapter
from .storage.dto import (
    DirectoryResult,
    FileMetadata,
    MimetypeResult,
    ReadResult,
    StreamResult,
    parse_timestamp,
)


class CloudinaryAdapter(FilesystemAdapter):
    """
    Filesystem adapter backed by Cloudinary, implementing the FilesystemAdapter interface.
    Each operation maps to a single Cloudinary API call.
    """

    def __init__(
        self,
        client: CloudinaryClient,
        on_response: Optional[ResponseObserver] = log_response,
        http_timeout: int = 30,
    ):
        self.client = client
        self.on_response = on_response
        self.http_timeout = http_timeout

    @staticmethod
    def _trim(path: str) -> str:
        return path.strip("/")

    def _upload(self, path: str, contents: bytes) -> Union[FileMetadata, bool]:
        """Stages the contents in a temporary file and uploads it under `path`."""
        path = self._trim(path)
        options = {
            "type": "upload",
            "public_id": path,
            "use_filename": True,
            "resource_type": "auto",
            "unique_filename": False,
        }

        try:
            with tempfile.TemporaryFile() as tmp_file:
                tmp_file.write(contents)
                tmp_file.seek(0)
                logging.info(f"Uploading '{path}' to Cloudinary...")
                response = self.client.upload(tmp_file, options)
        except OSError as e:
            logging.error(f"Failed to stage contents for '{path}': {e}")
            return False
        except ApiError as e:
            logging.error(f"Failed to upload '{path}': {e}")
            return False

        notify_response(self.on_response, response)

        return FileMetadata(
            type="file",
            path=path,
            size=response["bytes"],
            timestamp=parse_timestamp(response["created_at"]),
            contents=contents,
            visibility="public",
        )

    def _unsupported(self, operation: str, path: str):
        logging.error(f"{operation} is not supported by {type(self).__name__}. Path: {path}")
        raise UnsupportedOperationError(
            f"{type(self).__name__} does not support {operation}. Path: {path}"
        )

    def write(self, path: str, contents: bytes, config: Optional[dict] = None):
        return self._upload(path, contents)

    def write_stream(self, path: str, resource, config: Optional[dict] = None):
        self._unsupported("stream", path)

    def update(self, path: str, contents: bytes, config: Optional[dict] = None):
        return self._upload(path, contents)

    def update_stream(self, path: str, resource, config: Optional[dict] = None):
        self._unsupported("stream", path)

    def rename(self, path: str, new_path: str) -> bool:
        try:
            logging.info(f"Renaming '{path}' to '{new_path}'...")
            response = self.client.rename(path, new_path)
        except NotFound:
            logging.warning(f"Cannot rename '{path}': it does not exist.")
            return False

        notify_response(self.on_response, response)
        return True

    def copy(self, path: str, new_path: str, config: Optional[dict] = None) -> bool:
        """Copies by downloading the source and uploading it again under `new_path`."""
        source = self.read(path)
        if source is False:
            return False

        if self.write(new_path, source.contents, config) is False:
            return False

        return True

    def delete(self, path: str) -> bool:
        try:
            logging.info(f"Deleting '{path}'...")
            response = self.client.destroy(path)
        except NotFound:
            logging.warning(f"'{path}' not found. Nothing to delete.")
            return False

        notify_response(self.on_response, response)
        return True

    def delete_directory(self, dirname: str) -> bool:
        try:
            logging.info(f"Deleting folder '{dirname}'...")
            response = self.client.delete_folder(dirname)
        except ApiError as e:
            logging.error(f"Failed to delete folder '{dirname}': {e}")
            return False

        notify_response(self.on_response, response)
        return True

    def create_directory(self, dirname: str, config: Optional[dict] = None):
        try:
            logging.info(f"Creating folder '{dirname}'...")
            response = self.client.create_folder(dirname)
        except ApiError as e:
            logging.error(f"Failed to create folder '{dirname}': {e}")
            return False

        notify_response(self.on_response, response)
        return DirectoryResult(path=self._trim(dirname), type="dir")

    def exists(self, path: str) -> bool:
        try:
            response = self.client.explicit(path, {"type": "upload"})
        except NotFound:
            return False

        notify_response(self.on_response, response)
        return True

    def read(self, path: str):
        result = self.read_stream(path)
        if result is False:
            return False

        return ReadResult(contents=result.stream)

    def read_stream(self, path: str):
        """
        Fetches the whole asset from its delivery URL. Despite the name the
        body is held in memory; Cloudinary offers no chunked download here.
        """
        try:
            url = self.get_url(path)
        except NotFound:
            logging.warning(f"Cannot read '{path}': it does not exist.")
            return False

        try:
            logging.info(f"Downloading '{path}' from {url}...")
            response = requests.get(url, timeout=self.http_timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logging.error(f"Failed to download '{path}': {e}")
            return False

        return StreamResult(stream=response.content)

    def list_contents(self, directory: str = "", recursive: bool = False) -> List[FileMetadata]:
        """
        Lists uploaded assets whose public id starts with `directory`.
        `recursive` is accepted for interface compatibility and ignored:
        the prefix query decides the depth.
        Only the first page of the Admin API result is returned (10 assets
        unless the service default changes); `next_cursor` is not followed.
        """
        options = {
            "type": "upload",
            "prefix": directory,
        }

        try:
            logging.info(f"Listing Cloudinary assets with prefix '{directory}'")
            response = self.client.assets(options)
        except ApiError as e:
            logging.error(f"Failed to list assets with prefix '{directory}': {e}")
            return []

        notify_response(self.on_response, response)

        return [
            FileMetadata(
                path=resource["public_id"],
                size=resource["bytes"],
                type="file",
                version=resource["version"],
                timestamp=parse_timestamp(resource["created_at"]),
            )
            for resource in response["resources"]
        ]

    def get_metadata(self, path: str):
        try:
            response = self.client.explicit(path, {"type": "upload"})
        except NotFound:
            logging.warning(f"No metadata for '{path}': it does not exist.")
            return False

        notify_response(self.on_response, response)

        storage = response["storage"]
        return FileMetadata(
            path=storage["public_id"],
            size=storage["bytes"],
            type="file",
            version=storage["version"],
            timestamp=parse_timestamp(storage["created_at"]),
        )

    def get_size(self, path: str):
        return self.get_metadata(path)

    def get_mimetype(self, path: str):
        """Downloads the asset and lets libmagic sniff its MIME type."""
        result = self.read(path)
        if result is False:
            return False

        try:
            with tempfile.NamedTemporaryFile() as tmp_file:
                tmp_file.write(result.contents)
                tmp_file.flush()
                mime = magic.from_file(tmp_file.name, mime=True)
        except (OSError, magic.MagicException) as e:
            logging.error(f"Failed to detect the MIME type of '{path}': {e}")
            return False

        if not mime:
            return False

        return MimetypeResult(mimetype=mime)

    def get_timestamp(self, path: str):
        return self.get_metadata(path)

    def get_visibility(self, path: str):
        self._unsupported("visibility", path)

    def set_visibility(self, path: str, visibility: str):
        self._unsupported("visibility", path)

    def get_url(self, path: str) -> str:
        """Returns the delivery URL of an asset. Remote errors are not caught."""
        response = self.client.explicit(path, {"type": "upload"})

        notify_response(self.on_response, response)

        return response["url"]

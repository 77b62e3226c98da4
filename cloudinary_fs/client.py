# client.py
import logging
from typing import Any, Optional

import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as ApiError, NotFound

from .exceptions import ConfigurationError


class CloudinaryClient:
    """
    Thin handle over the Cloudinary SDK bound to one set of credentials.

    Credentials travel with every request instead of living in the SDK's
    global configuration, so several clients can coexist in one process.
    Missing assets are always reported as `NotFound`; every other service
    failure is raised as the SDK's generic `Error`.
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        secure: bool = True,
        timeout: Optional[int] = None,
    ):
        missing = [
            name
            for name, value in (
                ("cloud_name", cloud_name),
                ("api_key", api_key),
                ("api_secret", api_secret),
            )
            if not value
        ]
        if missing:
            logging.error(
                f"Failed to initialize Cloudinary client. Missing credentials: {', '.join(missing)}"
            )
            raise ConfigurationError(
                f"Missing Cloudinary credentials: {', '.join(missing)}"
            )

        self.cloud_name = cloud_name
        self._options = {
            "cloud_name": cloud_name,
            "api_key": api_key,
            "api_secret": api_secret,
            "secure": secure,
        }
        if timeout is not None:
            self._options["timeout"] = timeout
        logging.info(f"Cloudinary client initialized for cloud '{cloud_name}'.")

    @staticmethod
    def _check_upload_result(result: Any, public_id: str):
        """
        The upload API reports failures in the response body when called with
        `return_error=True`; turn them back into exceptions.
        """
        if not isinstance(result, dict) or "error" not in result:
            return result
        error = result["error"]
        message = error.get("message", f"Cloudinary request failed for '{public_id}'")
        if error.get("http_code") == 404:
            raise NotFound(message)
        raise ApiError(message)

    # --- Upload API ---

    def upload(self, file, options: dict):
        """Uploads a file object or local path with the given upload options."""
        result = cloudinary.uploader.upload(
            file, return_error=True, **options, **self._options
        )
        return self._check_upload_result(result, options.get("public_id", ""))

    def rename(self, path: str, new_path: str):
        result = cloudinary.uploader.rename(
            path, new_path, return_error=True, **self._options
        )
        return self._check_upload_result(result, path)

    def destroy(self, path: str):
        """
        Deletes an asset. Cloudinary answers a missing asset with
        {"result": "not found"} instead of an error status.
        """
        result = self._check_upload_result(
            cloudinary.uploader.destroy(path, return_error=True, **self._options),
            path,
        )
        if result.get("result") == "not found":
            raise NotFound(f"Resource not found - {path}")
        return result

    def explicit(self, path: str, options: dict):
        result = cloudinary.uploader.explicit(
            path, return_error=True, **options, **self._options
        )
        return self._check_upload_result(result, path)

    # --- Admin API ---

    def create_folder(self, name: str):
        return cloudinary.api.create_folder(name, **self._options)

    def delete_folder(self, name: str):
        return cloudinary.api.delete_folder(name, **self._options)

    def assets(self, options: dict):
        return cloudinary.api.resources(**options, **self._options)

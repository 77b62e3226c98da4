# main.py
import logging
from typing import Optional

from .adapter import CloudinaryAdapter
from .client import CloudinaryClient
from .config import Settings, get_settings
from .events import log_response


def setup_logging(settings: Optional[Settings] = None):
    """Configures logging to console and, if LOG_FILE is set, to a file."""
    settings = settings or get_settings()
    log_level_name = settings.LOG_LEVEL.upper()

    # Get the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level_name)

    # Clear any existing handlers to prevent duplicate logs on repeated setup
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if settings.LOG_FILE:
        try:
            file_handler = logging.FileHandler(settings.LOG_FILE)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            # Log to console if file logging fails (e.g., permissions)
            root_logger.error(f"Failed to set up file logging to {settings.LOG_FILE}: {e}")

    # Reducing "noise" from third-party libraries
    logging.getLogger("cloudinary").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def initialize_adapter(settings: Optional[Settings] = None) -> Optional[CloudinaryAdapter]:
    """
    Builds a CloudinaryAdapter from the settings.
    Returns None if the Cloudinary client cannot be created.
    """
    settings = settings or get_settings()
    try:
        client = CloudinaryClient(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=settings.CLOUDINARY_SECURE,
            timeout=settings.CLOUDINARY_TIMEOUT,
        )
    except Exception as e:
        logging.error(f"Failed to initialize Cloudinary adapter. Error: {e}", exc_info=True)
        return None

    return CloudinaryAdapter(
        client,
        on_response=log_response,
        http_timeout=settings.HTTP_TIMEOUT_SECONDS,
    )

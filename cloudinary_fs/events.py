# events.py
import logging
from typing import Any, Callable, Optional

ResponseObserver = Callable[[Any], None]


def log_response(response: Any):
    """Default response observer: writes the raw provider response to the debug log."""
    logging.debug(f"Cloudinary response: {response}")


def notify_response(observer: Optional[ResponseObserver], response: Any):
    """
    Hands a raw provider response to the observer.
    Observer failures are logged and never reach the caller.
    """
    if observer is None:
        return
    try:
        observer(response)
    except Exception as e:
        logging.warning(f"Response observer failed: {e}")

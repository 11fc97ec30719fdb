"""API key selection for the Gemini API

The orchestrator never reads keys from the environment itself - an
ApiKeyProvider is passed in so tests can use a fake one.
"""

import logging
import threading
from typing import Optional

from .errors import MissingApiKeyError

logger = logging.getLogger(__name__)


class ApiKeyProvider:
    """Holds the currently selected API key"""

    def __init__(self, api_key: Optional[str] = None, selector_enabled: bool = False,
                 unavailable_message: str = None):
        from .config import KEY_SELECTOR_UNAVAILABLE_MESSAGE
        self._api_key = (api_key or "").strip() or None
        self.selector_enabled = selector_enabled
        self.unavailable_message = unavailable_message or KEY_SELECTOR_UNAVAILABLE_MESSAGE
        self._lock = threading.Lock()

    @classmethod
    def from_env(cls) -> "ApiKeyProvider":
        from .config import GEMINI_API_KEY, KEY_SELECTOR_ENABLED
        return cls(api_key=GEMINI_API_KEY, selector_enabled=KEY_SELECTOR_ENABLED)

    def has_selected_key(self) -> bool:
        with self._lock:
            return self._api_key is not None

    def open_key_selector(self) -> Optional[str]:
        """Ask the host to show its key selector

        Returns None when the selector is available, otherwise the notice
        to show the user. Unsupported hosts are not an error.
        """
        if not self.selector_enabled:
            logger.warning(f"[Credentials] Key selector requested but unavailable")
            return self.unavailable_message
        logger.info(f"[Credentials] Key selector opened")
        return None

    def select_key(self, api_key: str) -> None:
        api_key = (api_key or "").strip()
        if not api_key:
            raise ValueError("API key must not be empty")
        with self._lock:
            self._api_key = api_key
        logger.info(f"[Credentials] API key selected")

    def clear_key(self) -> None:
        with self._lock:
            self._api_key = None
        logger.info(f"[Credentials] API key cleared")

    def get_api_key(self) -> str:
        with self._lock:
            if self._api_key is None:
                raise MissingApiKeyError()
            return self._api_key

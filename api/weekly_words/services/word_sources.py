"""
HTTP clients for the two external word sources.
"""
from typing import Any, Optional
from urllib.parse import quote
import logging

import requests

from weekly_words.core.config import settings
from weekly_words.core.exceptions import FetchFailure

logger = logging.getLogger(__name__)


class _JsonSource:
    """Shared GET-and-decode logic; every call carries a timeout."""

    name = "source"

    def __init__(self, http: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.http = http or requests.Session()
        self.timeout = timeout if timeout is not None else settings.request_timeout

    def _get_json(self, url: str, **kwargs) -> Any:
        try:
            response = self.http.get(url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            error_msg = f"{self.name} request failed: {str(e)}"
            if getattr(e, 'response', None) is not None:
                error_msg += f" - Status: {e.response.status_code}"
            logger.error(error_msg)
            raise FetchFailure(error_msg, source=self.name, original_exception=e) from e
        except ValueError as e:
            # requests' JSONDecodeError is a ValueError subclass
            error_msg = f"{self.name} returned malformed JSON: {str(e)}"
            logger.error(error_msg)
            raise FetchFailure(error_msg, source=self.name, original_exception=e) from e


class WordsApiClient(_JsonSource):
    """Primary source: WordsAPI random word lookup."""

    name = "WordsAPI"

    def __init__(
        self,
        http: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
    ):
        super().__init__(http, timeout)
        self.api_key = api_key if api_key is not None else settings.words_api_key
        self.url = url or settings.words_api_url

    def random_word(self) -> Any:
        """Fetch one random word, with definitions when WordsAPI has them."""
        data = self._get_json(self.url, headers={'X-RapidAPI-Key': self.api_key})
        logger.debug(f"WordsAPI fetch: {data}")
        return data


class WebsterClient(_JsonSource):
    """Secondary source: Merriam-Webster student dictionary."""

    name = "Merriam-Webster"

    def __init__(
        self,
        http: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        super().__init__(http, timeout)
        self.api_key = api_key if api_key is not None else settings.webster_api_key
        self.base_url = base_url or settings.webster_api_url

    def lookup(self, word: str) -> Any:
        """Look up ``word``; returns a list of entries or of spelling suggestions."""
        url = self.base_url + quote(word)
        data = self._get_json(url, params={'key': self.api_key})
        logger.debug(f"Webster fetch for '{word}': {data}")
        return data

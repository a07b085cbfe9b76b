# ai_tagger/adapters/transport.py
"""
HTTP transport used by provider adapters.

Adapters never call the network directly; they are handed a Transport so
tests can swap in a fake one.
"""

from typing import Any, Dict, Mapping, Optional, Protocol

import requests
from loguru import logger

from ..errors import NetworkError, ResponseFormatError

DEFAULT_TIMEOUT = 30.0


class Transport(Protocol):
    def post(self, url: str, headers: Mapping[str, str], body: Dict[str, Any],
             timeout: Optional[float] = None) -> Dict[str, Any]:
        ...


class RequestsTransport:
    """POST JSON with a shared requests.Session."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout

    def post(self, url: str, headers: Mapping[str, str], body: Dict[str, Any],
             timeout: Optional[float] = None) -> Dict[str, Any]:
        timeout = timeout or self.timeout
        try:
            response = self.session.post(url, headers=dict(headers), json=body, timeout=timeout)
        except requests.exceptions.Timeout as e:
            logger.error(f"LLM request timed out after {timeout}s")
            raise NetworkError(f"Request timed out after {timeout}s") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"LLM request failed: {e}")
            raise NetworkError(f"Request failed: {e}") from e

        if not response.ok:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            raise NetworkError(
                f"Request failed: {response.status_code} {response.reason}",
                status_code=response.status_code,
                payload=payload,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ResponseFormatError(f"Response from {url} is not valid JSON") from e

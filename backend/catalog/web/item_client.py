"""
Typed HTTP access to the catalog item API.

One method per verb. The caller names the type it wants back
(usually ResponseEnvelope[SomeDto]); the client never raises on transport
problems and returns None instead, so callers only check for None or
is_success.
"""

import logging
import os
from typing import Any, Dict, Optional, Type, TypeVar

import requests
from dotenv import load_dotenv
from pydantic import BaseModel, TypeAdapter, ValidationError

load_dotenv()

logger = logging.getLogger(__name__)

ITEM_API_BASE_URL = os.getenv("ITEM_API_BASE_URL", "http://localhost:8000/api")
DEFAULT_TIMEOUT = 30.0


def timeout_from_env(name: str = "ITEM_API_TIMEOUT", default: float = DEFAULT_TIMEOUT) -> float:
    """Seconds to wait for the item API. Falls back to the default on a missing or bad value."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not a number, using {default}s")
        return default
    if value <= 0:
        logger.warning(f"{name}={raw!r} must be positive, using {default}s")
        return default
    return value


ITEM_API_TIMEOUT = timeout_from_env()

T = TypeVar("T")


class RemoteItemClient:
    def __init__(
        self,
        base_url: str = ITEM_API_BASE_URL,
        timeout: float = ITEM_API_TIMEOUT,
        session: Optional[Any] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Anything with requests.Session's request() signature
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def close(self) -> None:
        """Release the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def url_for(self, relative_url: str) -> str:
        return f"{self.base_url}/{relative_url.lstrip('/')}"

    def send(
        self,
        method: str,
        relative_url: str,
        response_type: Type[T],
        data: Any = None,
        access_token: Optional[str] = None,
    ) -> Optional[T]:
        url = self.url_for(relative_url)
        headers: Dict[str, str] = {"Accept": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        body = None
        if method != "GET":
            headers["Content-Type"] = "application/json"
            body = data.model_dump(mode="json", by_alias=True) if isinstance(data, BaseModel) else data

        try:
            response = self.session.request(method, url, json=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            return None

        if response.status_code >= 400:
            logger.warning(f"{method} {url} returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError:
            logger.warning(f"{method} {url} returned a non-JSON body (HTTP {response.status_code})")
            return None

        try:
            return TypeAdapter(response_type).validate_python(payload)
        except ValidationError as e:
            logger.warning(f"{method} {url} returned an unexpected body: {e.error_count()} validation errors")
            return None

    def get(self, relative_url: str, response_type: Type[T], access_token: Optional[str] = None) -> Optional[T]:
        return self.send("GET", relative_url, response_type, access_token=access_token)

    def create_item(
        self, relative_url: str, item: Any, response_type: Type[T], access_token: Optional[str] = None
    ) -> Optional[T]:
        return self.send("PUT", relative_url, response_type, data=item, access_token=access_token)

    def update_item(
        self, relative_url: str, item: Any, response_type: Type[T], access_token: Optional[str] = None
    ) -> Optional[T]:
        return self.send("POST", relative_url, response_type, data=item, access_token=access_token)

    def delete_item(
        self, relative_url: str, item_id: int, response_type: Type[T], access_token: Optional[str] = None
    ) -> Optional[T]:
        return self.send("DELETE", relative_url, response_type, data=item_id, access_token=access_token)

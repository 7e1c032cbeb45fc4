from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import Response


class WeatherError(RuntimeError):
    """Base error carrying everything the API needs to build an error envelope."""

    status: int = 500
    error: str = "Failed to fetch weather data"

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        error: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status
        if error is not None:
            self.error = error
        self.details = details

    def as_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error, "message": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ConfigurationError(WeatherError):
    """Raised when the provider credential is missing."""


class UpstreamError(WeatherError):
    """The provider answered with a non-success status."""


class UpstreamAuthError(UpstreamError):
    status = 401


class NotFoundError(UpstreamError):
    status = 404


class RateLimitError(UpstreamError):
    status = 429


class UpstreamGenericError(UpstreamError):
    pass


class TransportError(WeatherError):
    """Network failure or deadline expiry before the provider answered."""

    def __init__(self, message: str, *, timed_out: bool = False, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.timed_out = timed_out


@dataclass
class RequestConfig:
    timeout: float = 15.0


class WeatherProvider:
    """Base class that adds timeouts and error wrapping for HTTP providers.

    A provider is shared across request threads and the aggregation workers,
    so unless a session is injected each thread gets its own
    ``requests.Session``.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self._session = session
        self._local = threading.local()
        self._log = logging.getLogger(self.__class__.__name__)

    @property
    def session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def _request(self, method: str, url: str, *, timeout: Optional[float] = None, **kwargs) -> Response:
        try:
            return self.session.request(
                method,
                url,
                timeout=timeout if timeout is not None else self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise TransportError("Weather provider request timed out", timed_out=True) from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise TransportError(f"Weather provider request failed: {exc}") from exc

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise TransportError("Weather provider returned invalid JSON") from exc


__all__ = [
    "ConfigurationError",
    "NotFoundError",
    "RateLimitError",
    "RequestConfig",
    "TransportError",
    "UpstreamAuthError",
    "UpstreamError",
    "UpstreamGenericError",
    "WeatherError",
    "WeatherProvider",
]

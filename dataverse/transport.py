"""
Requests Transport

Adapts a requests.Session to the call shape of Playwright's
APIRequestContext so the gateway can run without a browser when a bearer
token is available (e.g., fixtures seeding data from CI).
"""

import logging
from typing import Any, Dict, Optional

import requests

from .exceptions import TransportError

logger = logging.getLogger(__name__)

# Request timeout
DEFAULT_TIMEOUT = 30


class SessionResponse:
    """A requests.Response exposed through the APIResponse attributes the gateway reads."""

    def __init__(self, response: requests.Response):
        self._response = response

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def status_text(self) -> str:
        return self._response.reason or ''

    @property
    def headers(self):
        return self._response.headers

    @property
    def url(self) -> str:
        return self._response.url

    def json(self) -> Any:
        return self._response.json()

    def text(self) -> str:
        return self._response.text


class SessionTransport:
    """
    Minimal APIRequestContext look-alike backed by requests.

    Dict bodies are sent as JSON unless the caller sets a Content-Type,
    matching Playwright's handling of ``data``.
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 access_token: Optional[str] = None, timeout: int = DEFAULT_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.session.headers.update({
            'Accept': 'application/json',
            'OData-Version': '4.0',
            'OData-MaxVersion': '4.0',
        })
        if access_token:
            self.session.headers['Authorization'] = f"Bearer {access_token}"

    def _request(self, method: str, url: str, data: Any = None,
                 headers: Optional[Dict[str, str]] = None) -> SessionResponse:
        kwargs = {'headers': headers, 'timeout': self.timeout}
        has_content_type = any(k.lower() == 'content-type' for k in (headers or {}))
        if isinstance(data, (dict, list)) and not has_content_type:
            kwargs['json'] = data
        elif data is not None:
            kwargs['data'] = data

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {url} failed before a response: {e}")
            raise TransportError(f"{method} {url} failed: {e}", method=method, url=url) from e

        return SessionResponse(response)

    def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> SessionResponse:
        return self._request('GET', url, headers=headers)

    def post(self, url: str, data: Any = None,
             headers: Optional[Dict[str, str]] = None) -> SessionResponse:
        return self._request('POST', url, data=data, headers=headers)

    def patch(self, url: str, data: Any = None,
              headers: Optional[Dict[str, str]] = None) -> SessionResponse:
        return self._request('PATCH', url, data=data, headers=headers)

    def delete(self, url: str, headers: Optional[Dict[str, str]] = None) -> SessionResponse:
        return self._request('DELETE', url, headers=headers)

    def dispose(self) -> None:
        """Close the underlying session, mirroring APIRequestContext.dispose()."""
        self.session.close()

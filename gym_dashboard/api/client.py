# gym_dashboard/api/client.py
"""
Thin HTTP client for the gym REST API.

Every call either returns the decoded body or raises an `ApiError` subclass.
Retry policy lives in the query layer, not here.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Any, Dict, Optional

from curl_cffi import CurlMime
from curl_cffi import requests

from gym_dashboard.errors import NetworkError, ServerError, ValidationError
from simple_logger import Slogger

DEFAULT_TIMEOUT_SECONDS = 10


def _clean_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Drop None values and stringify booleans the way the server expects."""
    if not params:
        return None
    cleaned: Dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned or None


class ApiClient:
    """Issues requests against `base_url` and decodes the responses."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        impersonate: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.impersonate = impersonate
        self._session = session or requests.Session()

    # ------------------------------------------------------------------ #
    # verbs
    # ------------------------------------------------------------------ #

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._decode(self._request("GET", path, params=params))

    def post(self, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._decode(self._request("POST", path, params=params, json=json))

    def put(self, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._decode(self._request("PUT", path, params=params, json=json))

    def delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._decode(self._request("DELETE", path, params=params))

    def upload(self, path: str, file_path: str | Path, field: str = "file") -> Any:
        """POST a local file as multipart/form-data."""
        file_path = Path(file_path).expanduser()
        if not file_path.is_file():
            raise ValidationError(f"File not found: {file_path}")

        content_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
        multipart = CurlMime()
        multipart.addpart(
            name=field,
            content_type=content_type,
            filename=file_path.name,
            local_path=str(file_path),
        )
        Slogger.info(f"Uploading {file_path.name}", {"path": path, "size": file_path.stat().st_size})
        try:
            return self._decode(self._request("POST", path, multipart=multipart))
        finally:
            multipart.close()

    def download(self, path: str, dest: str | Path, params: Optional[Dict[str, Any]] = None) -> Path:
        """GET a binary blob (Excel/PDF export) and write it to `dest`."""
        response = self._request("GET", path, params=params)
        dest = Path(dest).expanduser()
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(response.content)
        Slogger.info(f"Saved download to {dest}", {"path": path, "bytes": len(response.content)})
        return dest

    # ------------------------------------------------------------------ #
    # internals
    # ------------------------------------------------------------------ #

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self.url_for(path)
        if "params" in kwargs:
            kwargs["params"] = _clean_params(kwargs["params"])
        if self.impersonate:
            kwargs["impersonate"] = self.impersonate

        context = {"method": method, "path": path}
        Slogger.debug(f"{method} {url}", {**context, "params": kwargs.get("params")})

        try:
            response = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestsError as e:
            Slogger.warning(f"Request failed: {e}", context)
            raise NetworkError(str(e) or "Network error", method=method, path=path) from e

        if response.status_code >= 400:
            payload = self._payload_of(response)
            message = self._message_of(payload) or f"Request failed with status code {response.status_code}"
            Slogger.warning(message, {**context, "status": response.status_code})
            raise ServerError(
                message,
                status=response.status_code,
                payload=payload,
                method=method,
                path=path,
            )

        return response

    @staticmethod
    def _payload_of(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _message_of(payload: Any) -> Optional[str]:
        if isinstance(payload, dict):
            message = payload.get("message") or payload.get("error")
            return str(message) if message else None
        if isinstance(payload, str) and payload.strip():
            return payload.strip()
        return None

    def _decode(self, response: requests.Response) -> Any:
        return self._payload_of(response)

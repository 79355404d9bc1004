"""
HTTP client for the advisory model server. Uses requests with explicit timeouts;
every failure surfaces as APIError with status/path/body context.
"""
import json
import logging

import requests

logger = logging.getLogger(__name__)

_API_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "texturegen/0.1",
}


class APIError(Exception):
    """API call failed with status or invalid response."""
    def __init__(self, message: str, status_code: int | None = None, path: str = "", body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.path = path
        self.body = body

    @property
    def is_timeout(self) -> bool:
        return isinstance(self.__cause__, requests.exceptions.Timeout)

    @property
    def is_connection_refused(self) -> bool:
        return isinstance(self.__cause__, requests.exceptions.ConnectionError) and not self.is_timeout


def _parse_json_response(resp: requests.Response) -> dict:
    """Parse JSON body; raise APIError with context if invalid."""
    if not resp.content:
        return {}
    try:
        data = resp.json()
    except (json.JSONDecodeError, ValueError) as e:
        raise APIError(
            f"Invalid JSON response: {e}",
            status_code=resp.status_code,
            path=resp.url or "",
            body=resp.text[:500] if resp.text else None,
        ) from e
    if not isinstance(data, dict):
        raise APIError(
            f"Expected JSON object, got {type(data).__name__}",
            status_code=resp.status_code,
            path=resp.url or "",
        )
    return data


def api_request(
    api_base: str,
    method: str,
    path: str,
    data: dict | None = None,
    timeout: float = 30,
) -> dict:
    """
    Execute one API request (no retry). Raises APIError on any failure with context:
    non-2xx status, connection error, timeout, bad URL, broken body or invalid JSON.
    """
    url = f"{api_base.rstrip('/')}{path}"
    headers = dict(_API_HEADERS)
    if isinstance(data, dict):
        body = json.dumps(data).encode()
        headers["Content-Type"] = "application/json"
    else:
        body = None

    try:
        resp = requests.request(method, url, data=body, headers=headers, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        err_body = e.response.text[:500] if e.response is not None and e.response.text else None
        raise APIError(f"API {method} {path} failed: {e}", status_code=status, path=path, body=err_body) from e
    except requests.exceptions.RequestException as e:
        logger.debug("API %s %s failed: %s", method, url, e)
        raise APIError(f"API {method} {path} failed: {e}", path=path) from e
    return _parse_json_response(resp)

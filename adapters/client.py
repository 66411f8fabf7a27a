"""
Resource client — generic request executor for the remote note service.

Builds URLs against the configured base, attaches the bearer token,
serializes JSON bodies and normalizes every outcome into an ApiResult:

- ApiSuccess(data, meta) for 2xx responses
- ApiFailure(code, message) for everything else

Never raises for remote 4xx/5xx or transport failures. Structured error
envelopes from the remote service pass through unchanged; otherwise a
failure is synthesized (HTTP_ERROR from the status, NETWORK_ERROR from
the transport).
"""

import json
from typing import Any, Callable, TypeVar

import httpx

from config import Config
from logging_config import logger, log_api_call, log_api_result
from models import ApiFailure, ApiResult, ApiSuccess, ErrorCode, Pagination, ResponseMeta

__all__ = [
    "ApiClient",
    "HTTP_TIMEOUT",
    "USER_AGENT",
    "map_result",
]

# Transport timeout (seconds). Operations define no timeout of their own.
HTTP_TIMEOUT = 30

USER_AGENT = "sidvy-mcp/1.0.0"

T = TypeVar("T")
U = TypeVar("U")


def map_result(result: ApiResult[T], parse: Callable[[T], U]) -> ApiResult[U]:
    """Apply parse to a Success payload; pass a Failure through untouched."""
    if isinstance(result, ApiFailure):
        return result
    return ApiSuccess(data=parse(result.data), meta=result.meta)


def _clean_params(params: dict[str, Any] | None) -> dict[str, str]:
    """Drop None values and stringify the rest the way the remote expects."""
    if not params:
        return {}
    cleaned: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            cleaned[key] = "true" if value else "false"
        else:
            cleaned[key] = str(value)
    return cleaned


def _parse_json(response: httpx.Response) -> Any:
    """Response body as JSON, or None when empty or not JSON."""
    try:
        return response.json()
    except ValueError:
        return None


def _int_or(value: Any, default: int | None) -> int | None:
    """Integer pagination field; null or non-numeric falls back to default."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _parse_meta(raw: Any) -> ResponseMeta | None:
    if not isinstance(raw, dict):
        return None
    pagination = None
    raw_pagination = raw.get("pagination")
    total_pages = _int_or(raw_pagination.get("totalPages"), None) if isinstance(raw_pagination, dict) else None
    # No usable totalPages: treat as unpaginated, callers fall back to short-page detection
    if total_pages is not None:
        pagination = Pagination(
            page=_int_or(raw_pagination.get("page"), 1),
            limit=_int_or(raw_pagination.get("limit"), 0),
            total=_int_or(raw_pagination.get("total"), 0),
            total_pages=total_pages,
        )
    return ResponseMeta(
        pagination=pagination,
        count=raw.get("count"),
        filters=raw.get("filters") or {},
    )


def _envelope_failure(payload: Any) -> ApiFailure | None:
    """Extract a remote-declared error envelope, if the payload is one."""
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict):
        return ApiFailure(
            code=str(error.get("code") or ErrorCode.HTTP_ERROR.value),
            message=str(error.get("message") or "Unknown error occurred"),
        )
    if payload.get("success") is False and isinstance(error, str):
        return ApiFailure(code=ErrorCode.HTTP_ERROR.value, message=error)
    return None


class ApiClient:
    """
    Synchronous client for the remote REST API.

    Operations issue calls one at a time; there is no shared mutable state
    besides the connection pool, so no locking is needed.
    """

    def __init__(self, config: Config, transport: httpx.BaseTransport | None = None):
        self._config = config
        self._headers = self._build_headers(config)
        self._http = httpx.Client(
            timeout=httpx.Timeout(HTTP_TIMEOUT),
            transport=transport,
        )

    @property
    def config(self) -> Config:
        return self._config

    @staticmethod
    def _build_headers(config: Config) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        if config.api_token:
            headers["Authorization"] = f"Bearer {config.api_token}"
        return headers

    def update_config(self, **changes: Any) -> None:
        """Swap configuration values (e.g. a new token) on a live client."""
        self._config = self._config.with_changes(**changes)
        self._headers = self._build_headers(self._config)

    def _build_url(self, path: str) -> str:
        base = self._config.api_url.rstrip("/")
        return f"{base}/{path.lstrip('/')}"

    def _redacted_headers(self) -> dict[str, str]:
        headers = dict(self._headers)
        if "Authorization" in headers:
            headers["Authorization"] = "Bearer ***"
        return headers

    def execute(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> ApiResult[Any]:
        """
        Execute one request and normalize the outcome.

        Args:
            method: HTTP verb (GET, POST, PUT, DELETE)
            path: Path relative to the configured base URL
            body: JSON-serializable body (sent when not None)
            params: Query parameters; None values are dropped

        Returns:
            ApiSuccess or ApiFailure. Never raises for remote/transport errors.
        """
        url = self._build_url(path)
        query = _clean_params(params)
        debug = self._config.debug

        if debug:
            log_api_call(method, url, **query)
            logger.debug(f"Request headers: {json.dumps(self._redacted_headers(), indent=2)}")
            if body is not None:
                logger.debug(f"Request body: {json.dumps(body, indent=2, default=str)}")

        try:
            response = self._http.request(
                method,
                url,
                params=query or None,
                json=body,
                headers=self._headers,
            )
        except httpx.RequestError as e:
            if debug:
                logger.debug(f"API error: {method} {url}: {e!r}")
            return ApiFailure(
                code=ErrorCode.NETWORK_ERROR.value,
                message=str(e) or "Network or server error occurred",
            )

        payload = _parse_json(response)

        if debug:
            count = len(payload["data"]) if isinstance(payload, dict) and isinstance(payload.get("data"), list) else None
            log_api_result(method, url, response.status_code, count)
            if payload is not None:
                logger.debug(f"Response body: {json.dumps(payload, indent=2, default=str)}")

        if not response.is_success:
            failure = _envelope_failure(payload)
            if failure is not None:
                return failure
            return ApiFailure(
                code=ErrorCode.HTTP_ERROR.value,
                message=f"HTTP {response.status_code}: {response.reason_phrase}",
            )

        # 2xx that still declares a failure
        if isinstance(payload, dict) and payload.get("success") is False:
            failure = _envelope_failure(payload)
            if failure is not None:
                return failure

        if isinstance(payload, dict) and "data" in payload:
            data = payload["data"]
            meta = _parse_meta(payload.get("meta"))
        else:
            data = payload if payload is not None else {}
            meta = None

        return ApiSuccess(data=data, meta=meta)

    def get(self, path: str, params: dict[str, Any] | None = None) -> ApiResult[Any]:
        return self.execute("GET", path, params=params)

    def post(self, path: str, body: Any = None) -> ApiResult[Any]:
        return self.execute("POST", path, body=body)

    def put(self, path: str, body: Any = None) -> ApiResult[Any]:
        return self.execute("PUT", path, body=body)

    def delete(self, path: str, body: Any = None) -> ApiResult[Any]:
        return self.execute("DELETE", path, body=body)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

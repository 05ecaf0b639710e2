"""Redmine API クライアント"""

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from ..config import Config
from ..logging_setup import get_logger

logger = get_logger(__name__)


class RedmineAPIError(Exception):
    """Redmine API エラー"""

    pass


@dataclass(frozen=True)
class RedmineResponse:
    """1 回のリクエストに対するレスポンス"""

    status_code: int
    body: str
    content_type: str


class RedmineClient:
    """Redmine API Client"""

    def __init__(self, config: Config):
        self.config = config
        self.base_url = config.redmine.base_url
        self.api_key = config.redmine.api_key
        self.timeout = config.redmine.timeout_sec

        # HTTPクライアントを初期化
        headers = {}
        if self.api_key:
            headers["X-Redmine-API-Key"] = self.api_key

        self.client = httpx.Client(
            base_url=self.base_url, headers=headers, timeout=self.timeout
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.client.close()

    def _make_request(
        self, method: str, path: str, body: Optional[Any] = None
    ) -> RedmineResponse:
        """API リクエストを実行"""
        kwargs: dict[str, Any] = {}
        if isinstance(body, str):
            kwargs["content"] = body.encode("utf-8")
            kwargs["headers"] = {"Content-Type": "application/xml"}
        elif body is not None:
            kwargs["json"] = body

        logger.debug("Sending request", method=method, path=path)
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.exception("Request failed", method=method, path=path)
            raise RedmineAPIError(f"Request failed: {str(e)}") from e

        logger.debug(
            "Received response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return RedmineResponse(
            status_code=response.status_code,
            body=response.text,
            content_type=response.headers.get("content-type", ""),
        )

    def request_get(self, path: str) -> RedmineResponse:
        return self._make_request("GET", path)

    def request_post(self, path: str, body: Any = None) -> RedmineResponse:
        return self._make_request("POST", path, body)

    def request_put(self, path: str, body: Any = None) -> RedmineResponse:
        return self._make_request("PUT", path, body)

    def request_delete(self, path: str) -> RedmineResponse:
        return self._make_request("DELETE", path)

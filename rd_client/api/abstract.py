"""API クラスの共通処理"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional
from xml.etree.ElementTree import Element

from ..logging_setup import get_logger
from .client import RedmineClient, RedmineResponse
from .decoder import decode_body, decode_write_body
from .params import build_query, sanitize_params
from .xml_payload import attach_custom_field_xml

logger = get_logger(__name__)

# Redmine がサーバ側で 1 リクエストあたりに返す件数の上限
MAX_CHUNK_SIZE = 100

DEFAULT_PAGINATION = {"limit": 25, "offset": 0}


def _merge_values(current: Any, new: Any) -> Any:
    if isinstance(current, dict) and isinstance(new, dict):
        return merge_recursive(current, new)
    current_list = current if isinstance(current, list) else [current]
    new_list = new if isinstance(new, list) else [new]
    return current_list + new_list


def merge_recursive(base: dict[str, Any], new: dict[str, Any]) -> dict[str, Any]:
    """2 つのページを再帰的にマージ

    同じキーが両方にあれば上書きせず 1 つのリストにまとめる。
    ``{"issues": [1, 2]}`` と ``{"issues": [3]}`` は ``{"issues": [1, 2, 3]}`` になる。
    """
    result = dict(base)
    for key, value in new.items():
        if key in result:
            result[key] = _merge_values(result[key], value)
        else:
            result[key] = value
    return result


class AbstractApi:
    """リソースごとの API クラスの基底クラス"""

    def __init__(self, client: RedmineClient):
        self.client = client
        self.last_response: Optional[RedmineResponse] = None

    def last_call_failed(self) -> bool:
        """直前の API 呼び出しが失敗したかどうか"""
        if self.last_response is None:
            return True
        return self.last_response.status_code not in (200, 201)

    def get(self, path: str, decode_json: bool = True) -> Any:
        self.last_response = self.client.request_get(path)
        return decode_body(
            self.last_response.body, self.last_response.content_type, decode_json
        )

    def post(self, path: str, data: Any) -> Any:
        self.last_response = self.client.request_post(path, data)
        return decode_write_body(
            self.last_response.body, self.last_response.content_type
        )

    def put(self, path: str, data: Any) -> Any:
        self.last_response = self.client.request_put(path, data)
        return decode_write_body(
            self.last_response.body, self.last_response.content_type
        )

    def delete(self, path: str) -> str:
        self.last_response = self.client.request_delete(path)
        return self.last_response.body

    def sanitize_params(
        self, defaults: dict[str, Any], params: dict[str, Any]
    ) -> dict[str, Any]:
        return sanitize_params(defaults, params)

    def retrieve_all(
        self, endpoint: str, params: Optional[dict[str, Any]] = None
    ) -> Any:
        """エンドポイントの全件を取得 (100 件を超える場合も分割して取得)

        ``limit``/``offset`` を 100 件以下のチャンクに分けて順番にリクエストし、
        結果を ``merge_recursive`` でまとめて返す。
        パラメータが空なら 1 回だけ GET してデコード結果をそのまま返す。
        """
        if not params:
            return self.get(endpoint)

        params = self.sanitize_params(DEFAULT_PAGINATION, params)

        result: dict[str, Any] = {}
        limit = int(params.get("limit", 0))
        offset = int(params.get("offset", 0))

        while limit > 0:
            chunk_size = min(limit, MAX_CHUNK_SIZE)
            limit -= chunk_size
            params["limit"] = chunk_size
            params["offset"] = offset

            logger.debug(
                "Fetching chunk", endpoint=endpoint, limit=chunk_size, offset=offset
            )
            decoded = self.get(f"{endpoint}?{build_query(params)}")
            chunk = decoded if isinstance(decoded, dict) else {}
            result = merge_recursive(result, chunk)

            offset += chunk_size
            # limit を含まないレスポンスはページング非対応とみなして終了
            if (
                not chunk
                or "limit" not in chunk
                or (
                    "offset" in chunk
                    and "total_count" in chunk
                    and chunk["offset"] >= chunk["total_count"]
                )
            ):
                limit = 0

        return result

    def attach_custom_field_xml(
        self, xml: Element, fields: Iterable[Mapping[str, Any]]
    ) -> Element:
        return attach_custom_field_xml(xml, fields)

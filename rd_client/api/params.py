"""リクエストパラメータの整形"""

import re
from typing import Any
from urllib.parse import urlencode

# http_build_query 形式の添字付き配列キー (filter%5B0%5D) を filter%5B%5D に変換
_INDEXED_BRACKET = re.compile(r"%5B[0-9]+%5D", re.IGNORECASE)


def is_not_null(value: Any) -> bool:
    """値が「設定済み」かどうか (0 は設定済みとして扱う)"""
    if value is False or value is None or value == "":
        return False
    if isinstance(value, (list, tuple, dict, set)) and not value:
        return False
    return True


def sanitize_params(defaults: dict[str, Any], params: dict[str, Any]) -> dict[str, Any]:
    """デフォルト値にパラメータを上書きし、未設定の値を除外"""
    merged = {**defaults, **params}
    return {key: value for key, value in merged.items() if is_not_null(value)}


def _flatten(prefix: str, value: Any) -> list[tuple[str, str]]:
    if value is None:
        return []
    if isinstance(value, dict):
        pairs: list[tuple[str, str]] = []
        for key, item in value.items():
            pairs.extend(_flatten(f"{prefix}[{key}]", item))
        return pairs
    if isinstance(value, (list, tuple)):
        pairs = []
        for index, item in enumerate(value):
            pairs.extend(_flatten(f"{prefix}[{index}]", item))
        return pairs
    if isinstance(value, bool):
        return [(prefix, "1" if value else "0")]
    return [(prefix, str(value))]


def build_query(params: dict[str, Any]) -> str:
    """Redmine が配列として解釈できるクエリ文字列を生成

    ``{"filter": ["a", "b"]}`` は ``filter%5B%5D=a&filter%5B%5D=b`` になる。
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        pairs.extend(_flatten(str(key), value))
    return _INDEXED_BRACKET.sub("%5B%5D", urlencode(pairs))

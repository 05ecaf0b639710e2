"""レスポンスボディのデコード"""

import json
from dataclasses import dataclass
from typing import Any
from xml.etree import ElementTree


@dataclass(frozen=True)
class DecodeError:
    """JSON として解釈できなかったボディ

    例外ではなく値として返す。呼び出し側はそのまま表示できる。
    """

    message: str

    def __str__(self) -> str:
        return f"Error decoding body as JSON: {self.message}"


def decode_body(body: str, content_type: str, decode_json: bool = True) -> Any:
    """GET レスポンスのボディを Content-Type に応じてデコード

    - 空ボディは ``None``
    - ``application/xml`` はルート要素 (パース失敗は ``ParseError`` を送出)
    - ``application/json`` は dict/list、失敗時は ``DecodeError``
    - それ以外は文字列のまま
    """
    if body == "":
        return None

    if content_type.startswith("application/xml"):
        return ElementTree.fromstring(body)

    if decode_json and content_type.startswith("application/json"):
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            return DecodeError(str(e))

    return body


def decode_write_body(body: str, content_type: str) -> Any:
    """POST/PUT レスポンスのボディをデコード (XML のみ解釈する)"""
    if body != "" and content_type.startswith("application/xml"):
        return ElementTree.fromstring(body)
    return body

"""書き込み用 XML ペイロードの組み立て"""

from collections.abc import Iterable, Mapping
from typing import Any
from xml.etree import ElementTree
from xml.etree.ElementTree import Element, SubElement


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return "" if value is None else str(value)


def _item_tag(tag: str) -> str:
    # watcher_user_ids -> watcher_user_id
    return tag[:-1] if tag.endswith("s") and len(tag) > 1 else "value"


def _append_value(parent: Element, tag: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        child = SubElement(parent, tag)
        for key, item in value.items():
            _append_value(child, str(key), item)
    elif isinstance(value, (list, tuple)):
        child = SubElement(parent, tag, {"type": "array"})
        item_tag = _item_tag(tag)
        for item in value:
            _append_value(child, item_tag, item)
    else:
        SubElement(parent, tag).text = _text(value)


def build_element(tag: str, fields: Mapping[str, Any]) -> Element:
    """``{"subject": "x"}`` から ``<tag><subject>x</subject></tag>`` を生成

    値が None の項目は出力しない。dict は入れ子の要素に、list は
    ``type="array"`` の要素に単数形の子要素を並べて出力する。
    """
    root = Element(tag)
    for key, value in fields.items():
        _append_value(root, key, value)
    return root


def attach_custom_field_xml(
    xml: Element, fields: Iterable[Mapping[str, Any]]
) -> Element:
    """カスタムフィールドを XML に追加して同じ要素を返す

    See: https://www.redmine.org/projects/redmine/wiki/Rest_api#Working-with-custom-fields
    """
    custom_fields = SubElement(xml, "custom_fields", {"type": "array"})
    for field in fields:
        custom_field = SubElement(custom_fields, "custom_field")

        if field.get("name") is not None:
            custom_field.set("name", _text(field["name"]))
        if field.get("field_format") is not None:
            custom_field.set("field_format", _text(field["field_format"]))
        custom_field.set("id", _text(field["id"]))

        value = field["value"]
        if isinstance(value, (list, tuple, Mapping)):
            custom_field.set("multiple", "true")
            values = SubElement(custom_field, "value")
            if isinstance(value, Mapping) and "token" in value:
                # 添付ファイル (token 付き) はキーを要素名として出力
                for key, item in value.items():
                    SubElement(values, str(key)).text = _text(item)
            else:
                values.set("type", "array")
                items = value.values() if isinstance(value, Mapping) else value
                for item in items:
                    SubElement(values, "value").text = _text(item)
        else:
            SubElement(custom_field, "value").text = _text(value)

    return xml


def to_xml_string(xml: Element) -> str:
    """XML 宣言付きの文字列に変換"""
    body = ElementTree.tostring(xml, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'

"""API クライアントモジュール"""

from .abstract import MAX_CHUNK_SIZE, AbstractApi, merge_recursive
from .client import RedmineAPIError, RedmineClient, RedmineResponse
from .decoder import DecodeError, decode_body, decode_write_body
from .params import build_query, is_not_null, sanitize_params
from .redmine import Redmine
from .resources import IssueApi, IssueStatusApi, ProjectApi, UserApi, VersionApi
from .xml_payload import attach_custom_field_xml, build_element, to_xml_string

__all__ = [
    "MAX_CHUNK_SIZE",
    "AbstractApi",
    "DecodeError",
    "IssueApi",
    "IssueStatusApi",
    "ProjectApi",
    "Redmine",
    "RedmineAPIError",
    "RedmineClient",
    "RedmineResponse",
    "UserApi",
    "VersionApi",
    "attach_custom_field_xml",
    "build_element",
    "build_query",
    "decode_body",
    "decode_write_body",
    "is_not_null",
    "merge_recursive",
    "sanitize_params",
    "to_xml_string",
]

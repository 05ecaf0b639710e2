"""リソースごとの API クラス"""

from typing import Any, Optional, Union

from .abstract import AbstractApi
from .params import build_query
from .xml_payload import build_element, to_xml_string

ResourceId = Union[int, str]


def _with_query(path: str, params: Optional[dict[str, Any]]) -> str:
    query = build_query(params) if params else ""
    return f"{path}?{query}" if query else path


class ProjectApi(AbstractApi):
    """プロジェクト API"""

    def all(self, params: Optional[dict[str, Any]] = None) -> Any:
        """プロジェクト一覧を取得"""
        return self.retrieve_all("/projects.json", params)

    def show(
        self, project_id: ResourceId, params: Optional[dict[str, Any]] = None
    ) -> Any:
        """特定プロジェクトを取得"""
        params = self.sanitize_params({}, params or {})
        return self.get(_with_query(f"/projects/{project_id}.json", params))

    def list_names(self) -> dict[int, str]:
        """プロジェクト ID と名前の対応表"""
        result = self.all({"limit": 10000})
        return {
            project["id"]: project["name"] for project in result.get("projects", [])
        }


class IssueApi(AbstractApi):
    """課題 API"""

    def all(self, params: Optional[dict[str, Any]] = None) -> Any:
        """課題一覧を取得"""
        return self.retrieve_all("/issues.json", params)

    def show(self, issue_id: ResourceId, params: Optional[dict[str, Any]] = None) -> Any:
        """単一課題を取得"""
        params = self.sanitize_params({}, params or {})
        return self.get(_with_query(f"/issues/{issue_id}.json", params))

    def _build_payload(self, params: dict[str, Any]) -> str:
        fields = dict(params)
        custom_fields = fields.pop("custom_fields", None)
        xml = build_element("issue", fields)
        if custom_fields:
            self.attach_custom_field_xml(xml, custom_fields)
        return to_xml_string(xml)

    def create(self, params: dict[str, Any]) -> Any:
        """課題を作成"""
        return self.post("/issues.xml", self._build_payload(params))

    def update(self, issue_id: ResourceId, params: dict[str, Any]) -> Any:
        """課題を更新"""
        return self.put(f"/issues/{issue_id}.xml", self._build_payload(params))

    def remove(self, issue_id: ResourceId) -> str:
        """課題を削除"""
        return self.delete(f"/issues/{issue_id}.xml")


class IssueStatusApi(AbstractApi):
    """課題ステータス API"""

    def all(self, params: Optional[dict[str, Any]] = None) -> Any:
        return self.retrieve_all("/issue_statuses.json", params)


class VersionApi(AbstractApi):
    """バージョン（マイルストーン）API"""

    def all(
        self, project_id: ResourceId, params: Optional[dict[str, Any]] = None
    ) -> Any:
        return self.retrieve_all(f"/projects/{project_id}/versions.json", params)


class UserApi(AbstractApi):
    """ユーザー API"""

    def all(self, params: Optional[dict[str, Any]] = None) -> Any:
        return self.retrieve_all("/users.json", params)

    def current(self) -> Any:
        """API キーに対応するユーザーを取得"""
        return self.get("/users/current.json")

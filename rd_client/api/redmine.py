"""Redmine API のエントリーポイント"""

from typing import Any

from ..config import Config
from .client import RedmineAPIError, RedmineClient
from .resources import IssueApi, IssueStatusApi, ProjectApi, UserApi, VersionApi


class Redmine:
    """リソース API をまとめたファサード"""

    def __init__(self, config: Config):
        self.client = RedmineClient(config)
        self.project = ProjectApi(self.client)
        self.issue = IssueApi(self.client)
        self.issue_status = IssueStatusApi(self.client)
        self.version = VersionApi(self.client)
        self.user = UserApi(self.client)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.client.close()

    def test_connection(self) -> dict[str, Any]:
        """接続テスト（軽量なエンドポイントを使用）"""
        try:
            projects_response = self.project.all({"limit": 25})
            if self.project.last_call_failed():
                raise RedmineAPIError(
                    f"HTTP {self.project.last_response.status_code}: "
                    f"{self.project.last_response.body}"
                )

            statuses_response = self.issue_status.get("/issue_statuses.json")
            if self.issue_status.last_call_failed():
                raise RedmineAPIError(
                    f"HTTP {self.issue_status.last_response.status_code}: "
                    f"{self.issue_status.last_response.body}"
                )

        except RedmineAPIError as e:
            return {
                "success": False,
                "message": f"接続失敗: {str(e)}",
                "projects_count": 0,
                "projects": [],
                "statuses": [],
            }

        total_count = projects_response.get("total_count", 0)
        if isinstance(total_count, list):
            total_count = total_count[-1]
        if not isinstance(statuses_response, dict):
            statuses_response = {}
        return {
            "success": True,
            "message": "接続成功",
            "projects_count": total_count,
            "projects": projects_response.get("projects", []),
            "statuses": statuses_response.get("issue_statuses", []),
        }

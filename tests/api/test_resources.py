"""リソース API のテスト"""

from unittest.mock import Mock, patch
from xml.etree import ElementTree

from rd_client.api.client import RedmineAPIError, RedmineResponse
from rd_client.api.redmine import Redmine
from rd_client.api.resources import (
    IssueApi,
    IssueStatusApi,
    ProjectApi,
    UserApi,
    VersionApi,
)


class TestProjectApi:
    """ProjectApi のテストクラス"""

    def test_all_without_params(self, mock_client, json_response):
        mock_client.request_get.return_value = json_response({"projects": []})

        assert ProjectApi(mock_client).all() == {"projects": []}
        mock_client.request_get.assert_called_once_with("/projects.json")

    def test_show_with_include(self, mock_client, json_response):
        mock_client.request_get.return_value = json_response({"project": {"id": 1}})

        result = ProjectApi(mock_client).show("test-project", {"include": "trackers"})

        assert result == {"project": {"id": 1}}
        mock_client.request_get.assert_called_once_with(
            "/projects/test-project.json?include=trackers"
        )

    def test_show_without_params(self, mock_client, json_response):
        mock_client.request_get.return_value = json_response({"project": {}})

        ProjectApi(mock_client).show(1)

        mock_client.request_get.assert_called_once_with("/projects/1.json")

    def test_list_names(self, mock_client, json_response):
        mock_client.request_get.return_value = json_response(
            {
                "projects": [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}],
                "total_count": 2,
                "offset": 0,
                "limit": 100,
            }
        )

        assert ProjectApi(mock_client).list_names() == {1: "A", 2: "B"}


class TestIssueApi:
    """IssueApi のテストクラス"""

    def test_all(self, mock_client, json_response):
        mock_client.request_get.return_value = json_response(
            {"issues": [], "total_count": 0, "offset": 0, "limit": 25}
        )

        IssueApi(mock_client).all({"project_id": 1, "status_id": "*"})

        mock_client.request_get.assert_called_once_with(
            "/issues.json?limit=25&offset=0&project_id=1&status_id=%2A"
        )

    def test_show(self, mock_client, json_response):
        mock_client.request_get.return_value = json_response({"issue": {}})

        IssueApi(mock_client).show(123, {"include": "journals"})

        mock_client.request_get.assert_called_once_with(
            "/issues/123.json?include=journals"
        )

    def test_create_with_custom_fields(self, mock_client):
        mock_client.request_post.return_value = RedmineResponse(
            201, "<issue><id>10</id></issue>", "application/xml"
        )
        api = IssueApi(mock_client)

        result = api.create(
            {
                "project_id": 1,
                "subject": "新しい課題",
                "custom_fields": [{"id": 2, "value": ["a", "b"]}],
            }
        )

        assert result.find("id").text == "10"
        assert api.last_call_failed() is False
        path, body = mock_client.request_post.call_args.args
        assert path == "/issues.xml"
        payload = ElementTree.fromstring(body.encode("utf-8"))
        assert payload.find("subject").text == "新しい課題"
        assert payload.find("custom_fields/custom_field").get("multiple") == "true"

    def test_create_with_watchers(self, mock_client):
        """配列の項目は type="array" の要素として送信される"""
        mock_client.request_post.return_value = RedmineResponse(201, "", "")

        IssueApi(mock_client).create({"subject": "s", "watcher_user_ids": [1, 2]})

        _, body = mock_client.request_post.call_args.args
        payload = ElementTree.fromstring(body.encode("utf-8"))
        watchers = payload.find("watcher_user_ids")
        assert watchers.get("type") == "array"
        assert [w.text for w in watchers] == ["1", "2"]
        assert "[1, 2]" not in body

    def test_update(self, mock_client):
        mock_client.request_put.return_value = RedmineResponse(200, "", "")

        IssueApi(mock_client).update(5, {"notes": "更新"})

        path, body = mock_client.request_put.call_args.args
        assert path == "/issues/5.xml"
        assert "<notes>更新</notes>" in body
        assert "custom_fields" not in body

    def test_remove(self, mock_client):
        mock_client.request_delete.return_value = RedmineResponse(204, "", "")

        assert IssueApi(mock_client).remove(5) == ""
        mock_client.request_delete.assert_called_once_with("/issues/5.xml")


class TestOtherApis:
    """その他のリソース API のテストクラス"""

    def test_issue_statuses(self, mock_client, json_response):
        mock_client.request_get.return_value = json_response({"issue_statuses": []})

        IssueStatusApi(mock_client).all()

        mock_client.request_get.assert_called_once_with("/issue_statuses.json")

    def test_versions(self, mock_client, json_response):
        mock_client.request_get.return_value = json_response({"versions": []})

        VersionApi(mock_client).all("proj")

        mock_client.request_get.assert_called_once_with(
            "/projects/proj/versions.json"
        )

    def test_users(self, mock_client, json_response):
        mock_client.request_get.return_value = json_response(
            {"users": [], "total_count": 0, "offset": 10, "limit": 50}
        )

        UserApi(mock_client).all({"limit": 50, "offset": 10})

        mock_client.request_get.assert_called_once_with(
            "/users.json?limit=50&offset=10"
        )

    def test_current_user(self, mock_client, json_response):
        mock_client.request_get.return_value = json_response({"user": {"id": 1}})

        assert UserApi(mock_client).current() == {"user": {"id": 1}}


class TestRedmine:
    """Redmine ファサードのテストクラス"""

    @patch("rd_client.api.redmine.RedmineClient")
    def test_context_manager(self, mock_client_class, mock_config):
        with Redmine(mock_config) as redmine:
            assert redmine.issue.client is mock_client_class.return_value

        mock_client_class.return_value.close.assert_called_once()

    @patch("rd_client.api.redmine.RedmineClient")
    def test_test_connection_success(
        self, mock_client_class, mock_config, json_response, mock_redmine_response
    ):
        """接続テスト成功のテスト"""
        mock_client_instance = Mock()

        def mock_request(path):
            if path.startswith("/projects.json"):
                return json_response(mock_redmine_response["projects"])
            return json_response(mock_redmine_response["issue_statuses"])

        mock_client_instance.request_get.side_effect = mock_request
        mock_client_class.return_value = mock_client_instance

        result = Redmine(mock_config).test_connection()

        assert result["success"] is True
        assert result["message"] == "接続成功"
        assert result["projects_count"] == 1
        assert len(result["projects"]) == 1
        assert len(result["statuses"]) == 2

    @patch("rd_client.api.redmine.RedmineClient")
    def test_test_connection_http_error(
        self, mock_client_class, mock_config, json_response
    ):
        """HTTP エラー時は失敗として返す"""
        mock_client_instance = Mock()
        mock_client_instance.request_get.return_value = RedmineResponse(
            401, "Unauthorized", "text/plain"
        )
        mock_client_class.return_value = mock_client_instance

        result = Redmine(mock_config).test_connection()

        assert result["success"] is False
        assert result["message"] == "接続失敗: HTTP 401: Unauthorized"
        assert result["projects"] == []

    @patch("rd_client.api.redmine.RedmineClient")
    def test_test_connection_failure(self, mock_client_class, mock_config):
        """接続テスト失敗のテスト"""
        mock_client_instance = Mock()
        mock_client_instance.request_get.side_effect = RedmineAPIError(
            "Request failed: Connection failed"
        )
        mock_client_class.return_value = mock_client_instance

        result = Redmine(mock_config).test_connection()

        assert result["success"] is False
        assert "接続失敗" in result["message"]
        assert result["projects_count"] == 0
        assert result["statuses"] == []

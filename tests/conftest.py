"""pytest設定とフィクスチャ"""

import json
import logging
from pathlib import Path
from tempfile import NamedTemporaryFile
from unittest.mock import Mock

import pytest
import yaml

from rd_client.api import RedmineResponse
from rd_client.config import Config, RedmineConfig


@pytest.fixture
def mock_config():
    """テスト用の設定オブジェクト"""
    return Config(
        redmine=RedmineConfig(
            base_url="http://test-redmine:3000",
            api_key="test-api-key",
            timeout_sec=10,
        ),
        log_level="WARNING",
    )


@pytest.fixture
def temp_config_file():
    """一時的な設定ファイル"""
    config_data = {
        "redmine": {
            "base_url": "http://temp-redmine:3000",
            "api_key": "temp-api-key",
            "timeout_sec": 20,
        },
        "log_level": "INFO",
    }

    with NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.dump(config_data, f, default_flow_style=False)
        temp_file = f.name

    yield temp_file

    # クリーンアップ
    Path(temp_file).unlink(missing_ok=True)


@pytest.fixture
def json_response():
    """JSON ボディの RedmineResponse を生成する関数"""

    def _make(data, status_code=200):
        return RedmineResponse(
            status_code=status_code,
            body=json.dumps(data),
            content_type="application/json; charset=utf-8",
        )

    return _make


@pytest.fixture
def mock_client():
    """RedmineClient のモック"""
    return Mock()


@pytest.fixture
def mock_redmine_response():
    """モックRedmineレスポンス"""
    return {
        "projects": {
            "projects": [
                {
                    "id": 1,
                    "identifier": "test-project",
                    "name": "Test Project",
                    "description": "Test Description",
                }
            ],
            "total_count": 1,
            "offset": 0,
            "limit": 25,
        },
        "issue_statuses": {
            "issue_statuses": [
                {"id": 1, "name": "新規", "is_closed": False},
                {"id": 5, "name": "完了", "is_closed": True},
            ]
        },
    }


@pytest.fixture(autouse=True)
def reset_logging():
    """テストごとにパッケージのログ設定を初期化"""
    yield
    package_logger = logging.getLogger("rd_client")
    for handler in list(package_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True

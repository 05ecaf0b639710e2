"""設定管理"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class RedmineConfig(BaseModel):
    """Redmine設定"""

    base_url: str = Field(default="http://redmine:3000")
    api_key: Optional[str] = Field(default=None)
    timeout_sec: int = Field(default=15)


class Config(BaseModel):
    """全体設定"""

    redmine: RedmineConfig = Field(default_factory=RedmineConfig)
    log_level: str = Field(default="WARNING")


def load_config(config_path: Optional[str] = None) -> Config:
    """設定ファイルを読み込み"""
    if config_path is None:
        # デフォルトの設定ファイルパスを探索
        candidates = [
            Path.cwd() / "rd-client.yaml",
            Path.home() / ".config" / "rd-client" / "config.yaml",
        ]
        for candidate in candidates:
            if candidate.exists():
                config_path = str(candidate)
                break

    if config_path and Path(config_path).exists():
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return Config(**data)

    # 設定ファイルがない場合はデフォルト設定に環境変数を反映
    config = Config()

    if os.getenv("REDMINE_URL"):
        config.redmine.base_url = os.environ["REDMINE_URL"]
    if os.getenv("REDMINE_API_KEY"):
        config.redmine.api_key = os.environ["REDMINE_API_KEY"]

    return config

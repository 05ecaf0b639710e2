"""設定管理モジュール"""

from .settings import Config, RedmineConfig, load_config

__all__ = ["Config", "RedmineConfig", "load_config"]

"""
설정 패키지

- AppConfig / SystemConfig / SubtitleConfig: Pydantic 설정 스키마
- ConfigManager: YAML 로드 + 환경변수 오버라이드
"""

from danmaku2ass.config.config_manager import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigManager,
    ConfigValidationError,
    parse_screen_size,
)
from danmaku2ass.config.schema import AppConfig, SubtitleConfig, SystemConfig

__all__ = [
    "AppConfig",
    "SubtitleConfig",
    "SystemConfig",
    "ConfigManager",
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigFileNotFoundError",
    "parse_screen_size",
]

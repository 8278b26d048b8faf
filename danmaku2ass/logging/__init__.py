"""
로깅 패키지

변환 실행 전에 setup_logging()으로 root logger를 구성합니다.
"""

from danmaku2ass.logging.structured_logger import get_session_id, setup_logging

__all__ = ["get_session_id", "setup_logging"]

"""
변환 실행 로그 설정 모듈입니다.

역할:
- 콘솔(stderr) 핸들러와, log_dir이 있을 때만 순환 로그 파일 핸들러 구성
- system.log_format에 따라 JSON(python-json-logger) 또는 텍스트 포맷 선택
- 실행마다 세션 ID를 정해 모든 로그 레코드에 포함

stdout은 변환 결과 메시지 전용이므로 로그는 stdout에 쓰지 않습니다.

사용 예시:
    >>> setup_logging(config)
    >>> logging.getLogger(__name__).info("변환 시작", extra={"input": "a.xml"})
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import uuid
from pathlib import Path
from typing import Optional

from pythonjsonlogger import jsonlogger

from danmaku2ass.config.schema import AppConfig, SystemConfig

LOG_FILENAME = "danmaku2ass.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 5

_session_id: str = ""


def setup_logging(config: AppConfig, session_id: Optional[str] = None) -> str:
    """
    root logger를 설정값에 맞게 다시 구성합니다.

    여러 번 호출해도 이전 핸들러를 닫고 교체하므로 핸들러가 쌓이지 않습니다.

    파라미터:
        config: AppConfig 인스턴스 (system 섹션만 사용)
        session_id: 세션 식별자. None이면 config.system.session_id, 그것도 비어 있으면 UUID

    반환값:
        str: 이번 실행에 사용된 세션 ID
    """
    global _session_id

    system = config.system
    _session_id = session_id or system.session_id or str(uuid.uuid4())
    level = getattr(logging, system.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for old_handler in root_logger.handlers[:]:
        root_logger.removeHandler(old_handler)
        old_handler.close()

    for handler in _build_handlers(system):
        handler.setLevel(level)
        handler.setFormatter(_make_formatter(system.log_format, _session_id))
        root_logger.addHandler(handler)

    logging.getLogger(__name__).debug(
        f"로깅 초기화: level={system.log_level}, format={system.log_format}, session={_session_id}"
    )
    return _session_id


def get_session_id() -> str:
    """마지막 setup_logging() 호출에서 정해진 세션 ID를 반환합니다."""
    return _session_id


# =============================================================================
# 내부 헬퍼
# =============================================================================

def _build_handlers(system: SystemConfig) -> list[logging.Handler]:
    """콘솔 핸들러와 (log_dir 설정 시) 파일 핸들러를 생성합니다."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if not system.log_dir:
        return handlers

    log_dir = Path(system.log_dir)
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=log_dir / LOG_FILENAME,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUP_COUNT,
                encoding="utf-8",
            )
        )
    except OSError as exc:
        # 파일 로그 없이 콘솔만으로 계속 진행
        print(f"Warning: cannot open log file in {log_dir}: {exc}", file=sys.stderr)

    return handlers


def _make_formatter(log_format: str, session_id: str) -> logging.Formatter:
    if log_format == "json":
        return _JsonFormatter(session_id=session_id)
    return _TextFormatter(session_id=session_id)


class _JsonFormatter(jsonlogger.JsonFormatter):
    """레코드마다 session_id, module, level 필드를 붙이는 JSON 포맷터입니다."""

    def __init__(self, session_id: str = "") -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
        self._session_id = session_id

    def add_fields(
        self,
        log_record: dict,
        record: logging.LogRecord,
        message_dict: dict,
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["session_id"] = self._session_id
        log_record["module"] = record.name
        log_record["level"] = record.levelname


class _TextFormatter(logging.Formatter):
    """세션 ID 앞 8자리를 접두어로 붙이는 텍스트 포맷터입니다."""

    def __init__(self, session_id: str = "") -> None:
        session_tag = session_id[:8] if session_id else "no-sid"
        super().__init__(
            fmt=f"%(asctime)s [{session_tag}] %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

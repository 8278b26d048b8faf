"""
탄막 파일 포맷 탐지 모듈입니다.

역할:
- 파일 앞부분(최대 100바이트)만 읽어 Bilibili XML / Niconico XML / AcFun JSON 판별
- 스트림 읽기 위치를 탐지 전 위치로 복원 (이후 파서가 처음부터 읽을 수 있도록)

판별 규칙:
- "<?xml"로 시작하고 "<i>"를 포함하면 Bilibili
- "<?xml"로 시작하고 <chat> 시작 태그를 포함하면 Niconico
- "["로 시작하면 AcFun
- 그 외는 UnrecognizedFormatError

문서 나머지 부분의 유효성은 검사하지 않습니다.

사용 예시:
    >>> with open("comments.xml", "rb") as f:
    ...     tag = probe_format(f)
"""

from __future__ import annotations

import logging
import re
from typing import IO, AnyStr

from danmaku2ass.parser import FormatTag, UnrecognizedFormatError

logger = logging.getLogger(__name__)

# 포맷 판별에 사용하는 최대 읽기 크기
PROBE_SIZE = 100

_XML_DECLARATION = "<?xml"
_BILIBILI_MARKER = "<i>"
# 속성이 없는 <chat> 와 속성이 있는 <chat vpos="..."> 모두 허용
_NICONICO_MARKER = re.compile(r"<chat[\s>]")
_JSON_ARRAY_START = "["
_BOM = "\ufeff"


def detect_format(prefix: bytes | str) -> FormatTag:
    """
    파일 앞부분 내용으로 포맷 태그를 판별합니다.

    파라미터:
        prefix: 파일 시작 부분 (bytes 또는 str)

    반환값:
        FormatTag: 판별된 포맷

    에러:
        UnrecognizedFormatError: 어떤 규칙에도 맞지 않을 때
    """
    if isinstance(prefix, bytes):
        # PROBE_SIZE 경계에서 잘린 멀티바이트 문자는 버림
        content = prefix.decode("utf-8", errors="ignore")
    else:
        content = prefix
    content = content[:PROBE_SIZE].removeprefix(_BOM)

    if content.startswith(_XML_DECLARATION):
        if _BILIBILI_MARKER in content:
            return FormatTag.BILIBILI
        if _NICONICO_MARKER.search(content):
            return FormatTag.NICONICO
    elif content.startswith(_JSON_ARRAY_START):
        return FormatTag.ACFUN

    raise UnrecognizedFormatError(f"unknown format: {content[:20]!r}")


def probe_format(stream: IO[AnyStr]) -> FormatTag:
    """
    스트림 앞부분을 읽어 포맷을 판별하고 읽기 위치를 복원합니다.

    바이너리 스트림은 PROBE_SIZE 바이트, 텍스트 스트림은 PROBE_SIZE 문자를 읽습니다.

    파라미터:
        stream: seek 가능한 읽기 스트림

    반환값:
        FormatTag: 판별된 포맷

    에러:
        UnrecognizedFormatError: 포맷을 판별할 수 없을 때
        OSError: 스트림 읽기/이동 실패 시
    """
    current_position = stream.tell()
    try:
        prefix = stream.read(PROBE_SIZE)
    finally:
        stream.seek(current_position)

    format_tag = detect_format(prefix)
    logger.debug(f"포맷 탐지 완료: {format_tag.value}")
    return format_tag

"""
Bilibili XML 탄막 파서입니다.

입력 예시:
    <?xml version="1.0" encoding="UTF-8"?>
    <i>
      <d p="12.34,1,25,16777215,1312863760,0,eff85771,42">탄막 내용</d>
    </i>

p 속성의 쉼표 구분 필드:
    [0] time: 표시 시각 (초, 소수)
    [1] mode: 탄막 모드 (1=스크롤, 4=하단, 5=상단, 6=역방향)
    [2] size: 폰트 크기 (기준 25)
    [3] color: 색상 (10진 RGB)
    [4] timestamp: 작성 시각 (UNIX 초)
    [5~] pool, user hash, row id 등 (사용하지 않음)
"""

from __future__ import annotations

import logging
import math
from typing import NamedTuple, Optional

from danmaku2ass.parser import Comment
from danmaku2ass.parser.common import build_comment, decode_xml, scale_size
from danmaku2ass.parser.mode_table import BILIBILI_MODES
from danmaku2ass.parser.text_metrics import TextMeasure, calculate_length

logger = logging.getLogger(__name__)

# p 속성에서 반드시 해석되어야 하는 앞쪽 필드 수
_REQUIRED_FIELDS = 5


class _Attributes(NamedTuple):
    timeline: float
    mode: int
    size: int
    color: int
    timestamp: int


def _parse_attributes(raw: str) -> Optional[_Attributes]:
    """p 속성 문자열을 해석합니다. 형식이 맞지 않으면 None을 반환합니다."""
    fields = raw.split(",")
    if len(fields) < _REQUIRED_FIELDS:
        return None

    try:
        timeline = float(fields[0])
        mode, size, color, timestamp = (int(value) for value in fields[1:_REQUIRED_FIELDS])
    except ValueError:
        return None

    if not math.isfinite(timeline):
        return None

    return _Attributes(timeline, mode, size, color, timestamp)


def parse_bilibili(
    content: bytes | str,
    font_size: float,
    measure: TextMeasure = calculate_length,
) -> list[Comment]:
    """
    Bilibili XML 문서를 Comment 목록으로 변환합니다.

    - p 속성 형식이 맞지 않는 레코드는 건너뜀
    - 지원하지 않는 모드의 레코드는 건너뜀
    - sequence는 p 속성 해석에 성공한 레코드 사이의 순번

    파라미터:
        content: XML 문서 전체
        font_size: 기준 폰트 크기
        measure: 텍스트 폭 측정 함수

    반환값:
        list[Comment]: 변환된 탄막 목록

    에러:
        CommentDecodeError: XML 구조가 깨졌을 때
    """
    root = decode_xml(content, "bilibili")

    comments: list[Comment] = []
    parsed_count = 0
    skipped_count = 0

    for element in root.iter("d"):
        attributes = _parse_attributes(element.get("p", ""))
        if attributes is None:
            skipped_count += 1
            continue

        sequence = parsed_count
        parsed_count += 1

        position = BILIBILI_MODES.lookup(attributes.mode)
        if position is None:
            skipped_count += 1
            continue

        comments.append(
            build_comment(
                timeline=attributes.timeline,
                timestamp=attributes.timestamp,
                sequence=sequence,
                raw_text=element.text or "",
                position=position,
                size=scale_size(attributes.size, font_size),
                color=attributes.color,
                measure=measure,
            )
        )

    logger.debug(f"Bilibili 파싱 완료: {len(comments)}개 변환, {skipped_count}개 건너뜀")
    return comments

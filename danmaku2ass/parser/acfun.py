"""
AcFun JSON 탄막 파서입니다.

입력 예시:
    [
      {"time": 12.34, "mode": 1, "size": 25, "color": 16777215, "content": "탄막 내용"}
    ]

필드:
    time: 표시 시각 (초)
    mode: 탄막 모드 (1=스크롤, 4=하단, 5=상단, 6=역방향)
    size: 폰트 크기 (기준 25)
    color: 색상 (10진 RGB)
    content: 탄막 텍스트

작성 시각 정보가 없으므로 timestamp는 항상 0입니다.
값이 null인 필드는 누락된 필드와 같이 기본값을 사용합니다.
"""

from __future__ import annotations

import json
import logging
import math

from pydantic import BaseModel, TypeAdapter, ValidationError, model_validator

from danmaku2ass.parser import DEFAULT_COLOR, Comment, CommentDecodeError
from danmaku2ass.parser.common import REFERENCE_FONT_SIZE, build_comment, scale_size
from danmaku2ass.parser.mode_table import ACFUN_MODES
from danmaku2ass.parser.text_metrics import TextMeasure, calculate_length

logger = logging.getLogger(__name__)


class AcfunRecord(BaseModel):
    """AcFun JSON 배열의 원소 1개입니다. 누락된 필드는 기본값을 사용합니다."""
    time: float = 0.0
    mode: int = 0
    size: int = int(REFERENCE_FONT_SIZE)
    color: int = DEFAULT_COLOR
    content: str = ""

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data):
        """null 값 필드를 제거하여 기본값이 적용되도록 합니다."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


_RECORDS_ADAPTER = TypeAdapter(list[AcfunRecord])


def parse_acfun(
    content: bytes | str,
    font_size: float,
    measure: TextMeasure = calculate_length,
) -> list[Comment]:
    """
    AcFun JSON 문서를 Comment 목록으로 변환합니다.

    - 지원하지 않는 모드의 레코드는 건너뜀
    - sequence는 원본 배열에서의 인덱스 (건너뛴 레코드도 번호를 차지함)

    에러:
        CommentDecodeError: JSON이 깨졌거나 중첩이 너무 깊을 때,
            최상위가 배열이 아니거나 필드 타입이 맞지 않을 때
    """
    try:
        raw_records = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as decode_error:
        raise CommentDecodeError(f"acfun JSON 디코딩 실패: {decode_error}") from decode_error

    try:
        records = _RECORDS_ADAPTER.validate_python(raw_records)
    except ValidationError as validation_error:
        raise CommentDecodeError(
            f"acfun 레코드 검증 실패: {validation_error.error_count()}개 에러"
        ) from validation_error

    comments: list[Comment] = []
    for index, record in enumerate(records):
        position = ACFUN_MODES.lookup(record.mode)
        if position is None or not math.isfinite(record.time):
            continue

        comments.append(
            build_comment(
                timeline=record.time,
                timestamp=0,
                sequence=index,
                raw_text=record.content,
                position=position,
                size=scale_size(record.size, font_size),
                color=record.color,
                measure=measure,
            )
        )

    logger.debug(f"AcFun 파싱 완료: {len(comments)}개 변환, {len(records) - len(comments)}개 건너뜀")
    return comments

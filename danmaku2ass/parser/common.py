"""
플랫폼 파서 공통 헬퍼입니다.

- decode_xml(): XML 문서를 루트 엘리먼트로 디코딩 (실패 시 CommentDecodeError)
- build_comment(): 텍스트 정규화와 크기 추정을 거쳐 Comment 생성
- scale_size(): 기준 크기 25를 쓰는 플랫폼의 폰트 크기 배율 계산
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from danmaku2ass.parser import DEFAULT_COLOR, Comment, CommentDecodeError, Position
from danmaku2ass.parser.text_metrics import TextMeasure, calculate_length, measure_box, normalize_text

# Bilibili / AcFun 의 기준 폰트 크기
REFERENCE_FONT_SIZE = 25.0


def decode_xml(content: bytes | str, platform: str) -> ET.Element:
    """
    XML 문서 전체를 디코딩하여 루트 엘리먼트를 반환합니다.

    에러:
        CommentDecodeError: 문서가 올바른 XML이 아닐 때
    """
    try:
        return ET.fromstring(content)
    except ET.ParseError as parse_error:
        raise CommentDecodeError(f"{platform} XML 디코딩 실패: {parse_error}") from parse_error


def scale_size(raw_size: float, font_size: float) -> float:
    """플랫폼 원본 크기를 기준 폰트 크기에 맞춰 변환합니다 (raw * base / 25)."""
    return float(raw_size) * font_size / REFERENCE_FONT_SIZE


def build_comment(
    *,
    timeline: float,
    timestamp: int,
    sequence: int,
    raw_text: str,
    position: Position,
    size: float,
    color: int = DEFAULT_COLOR,
    measure: TextMeasure = calculate_length,
) -> Comment:
    """원본 텍스트를 정규화하고 높이/너비를 추정하여 Comment를 생성합니다."""
    text = normalize_text(raw_text)
    height, width = measure_box(text, size, measure)
    return Comment(
        timeline=timeline,
        timestamp=timestamp,
        sequence=sequence,
        text=text,
        position=position,
        color=color,
        size=size,
        height=height,
        width=width,
    )

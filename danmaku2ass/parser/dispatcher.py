"""
포맷 태그에 맞는 플랫폼 파서를 호출하는 디스패처입니다.

사용 예시:
    >>> with open("comments.xml", "rb") as f:
    ...     tag = probe_format(f)
    ...     comments = parse_comments(f.read(), tag, font_size=48.0)
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable

from danmaku2ass.parser import Comment, FormatTag, UnsupportedFormatError
from danmaku2ass.parser.acfun import parse_acfun
from danmaku2ass.parser.bilibili import parse_bilibili
from danmaku2ass.parser.niconico import parse_niconico
from danmaku2ass.parser.text_metrics import TextMeasure, calculate_length

logger = logging.getLogger(__name__)

# (content, font_size, measure) -> list[Comment]
PlatformParser = Callable[[bytes | str, float, TextMeasure], list[Comment]]

PARSERS: MappingProxyType[FormatTag, PlatformParser] = MappingProxyType({
    FormatTag.BILIBILI: parse_bilibili,
    FormatTag.NICONICO: parse_niconico,
    FormatTag.ACFUN: parse_acfun,
})


def parse_comments(
    content: bytes | str,
    format_tag: FormatTag | str,
    font_size: float,
    measure: TextMeasure = calculate_length,
) -> list[Comment]:
    """
    포맷 태그에 해당하는 파서로 문서를 Comment 목록으로 변환합니다.

    파라미터:
        content: 파일 내용 전체
        format_tag: probe_format()의 결과 (FormatTag 또는 그 문자열 값)
        font_size: 기준 폰트 크기
        measure: 텍스트 폭 측정 함수

    반환값:
        list[Comment]: 변환된 탄막 목록

    에러:
        UnsupportedFormatError: 등록되지 않은 포맷 태그일 때
        CommentDecodeError: 문서 구조 디코딩 실패 시
    """
    try:
        tag = FormatTag(format_tag)
    except ValueError:
        raise UnsupportedFormatError(f"unsupported format: {format_tag}") from None

    parser = PARSERS.get(tag)
    if parser is None:
        raise UnsupportedFormatError(f"unsupported format: {tag.value}")

    comments = parser(content, font_size, measure)
    logger.debug(f"{tag.value} 파서 실행 완료: {len(comments)}개")
    return comments

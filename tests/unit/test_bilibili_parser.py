"""
Bilibili 파서 단위 테스트

검증 항목:
- p 속성 해석 및 모드 -> 위치 매핑
- 크기 배율 (raw * base / 25)
- 형식이 맞지 않거나 지원하지 않는 모드의 레코드는 건너뜀
- sequence 번호 부여 규칙
- "/n" 줄바꿈 정규화와 높이/너비 추정
- 깨진 XML은 CommentDecodeError
"""

from __future__ import annotations

import pytest

from danmaku2ass.parser import CommentDecodeError, Position
from danmaku2ass.parser.bilibili import parse_bilibili


# =============================================================================
# 테스트 헬퍼
# =============================================================================

def _make_document(*records: tuple[str, str]) -> bytes:
    """(p 속성, 텍스트) 목록으로 Bilibili XML 문서를 만듭니다."""
    body = "".join(f'<d p="{p}">{text}</d>' for p, text in records)
    return f'<?xml version="1.0" encoding="UTF-8"?><i>{body}</i>'.encode("utf-8")


# =============================================================================
# 기본 변환 테스트
# =============================================================================

def test_parse_single_scroll_comment():
    """모든 필드가 Comment로 옮겨지는지 확인합니다."""
    content = _make_document(("12.5,1,25,16711680,1312863760,0,abc,42", "안녕"))

    comments = parse_bilibili(content, font_size=48.0)

    assert len(comments) == 1
    comment = comments[0]
    assert comment.timeline == 12.5
    assert comment.timestamp == 1312863760
    assert comment.sequence == 0
    assert comment.text == "안녕"
    assert comment.position is Position.SCROLL
    assert comment.color == 0xFF0000
    assert comment.size == 48.0


@pytest.mark.parametrize(
    ("mode", "expected"),
    [("1", Position.SCROLL), ("4", Position.BOTTOM), ("5", Position.TOP), ("6", Position.REVERSE_SCROLL)],
)
def test_mode_mapping(mode, expected):
    content = _make_document((f"1.0,{mode},25,0,0", "x"))
    assert parse_bilibili(content, 25.0)[0].position is expected


def test_size_scaling():
    """size=50, 기준 20 -> 50*20/25 = 40.0인지 확인합니다."""
    content = _make_document(("0,1,50,0,0", "x"))
    assert parse_bilibili(content, font_size=20.0)[0].size == 40.0


# =============================================================================
# 레코드 건너뛰기 테스트
# =============================================================================

def test_unsupported_mode_is_skipped():
    """모드 7, 9 레코드는 출력에서 빠지는지 확인합니다."""
    content = _make_document(
        ("1.0,1,25,0,0", "a"),
        ("2.0,7,25,0,0", "special"),
        ("3.0,9,25,0,0", "unknown"),
        ("4.0,5,25,0,0", "b"),
    )

    comments = parse_bilibili(content, 25.0)

    assert [c.text for c in comments] == ["a", "b"]
    assert len(comments) < 4


@pytest.mark.parametrize(
    "p_attribute",
    ["", "1.0,1,25", "abc,1,25,0,0", "1.0,x,25,0,0", "1.0,1,25,0,later", "nan,1,25,0,0"],
)
def test_malformed_attribute_is_skipped(p_attribute):
    """p 속성 형식이 맞지 않는 레코드는 건너뛰고 나머지는 변환되는지 확인합니다."""
    content = _make_document((p_attribute, "bad"), ("1.0,1,25,0,0", "good"))

    comments = parse_bilibili(content, 25.0)

    assert [c.text for c in comments] == ["good"]


def test_missing_p_attribute_is_skipped():
    content = b'<?xml version="1.0"?><i><d>no attribute</d><d p="1,1,25,0,0">ok</d></i>'
    assert [c.text for c in parse_bilibili(content, 25.0)] == ["ok"]


def test_sequence_counts_parsed_records_only():
    """sequence는 p 속성 해석에 성공한 레코드 사이의 순번인지 확인합니다."""
    content = _make_document(
        ("broken", "skip"),
        ("1.0,1,25,0,0", "first"),
        ("2.0,9,25,0,0", "unsupported"),
        ("3.0,1,25,0,0", "third"),
    )

    comments = parse_bilibili(content, 25.0)

    assert [(c.text, c.sequence) for c in comments] == [("first", 0), ("third", 2)]


# =============================================================================
# 텍스트 정규화 / 크기 추정 테스트
# =============================================================================

def test_literal_newline_normalized_before_measure():
    content = _make_document(("0,1,25,0,0", "ab/ncd"))

    comment = parse_bilibili(content, 10.0)[0]

    assert comment.text == "ab\ncd"
    assert comment.height == 20.0
    assert comment.width == 50.0


def test_empty_text_becomes_empty_string():
    content = _make_document(("0,1,25,0,0", ""))
    comment = parse_bilibili(content, 10.0)[0]
    assert comment.text == ""
    assert comment.width == 0.0


def test_injected_measure_function():
    content = _make_document(("0,1,25,0,0", "abc"))
    comment = parse_bilibili(content, 10.0, measure=lambda text: 1.0)
    assert comment[0].width == 10.0


# =============================================================================
# 구조 오류 테스트
# =============================================================================

def test_malformed_xml_raises_decode_error():
    """XML 구조가 깨지면 부분 결과 없이 CommentDecodeError가 발생하는지 확인합니다."""
    content = b'<?xml version="1.0"?><i><d p="1,1,25,0,0">unterminated</i>'
    with pytest.raises(CommentDecodeError):
        parse_bilibili(content, 25.0)


def test_accepts_str_content():
    content = '<?xml version="1.0"?><i><d p="1,1,25,0,0">텍스트</d></i>'
    assert parse_bilibili(content, 25.0)[0].text == "텍스트"

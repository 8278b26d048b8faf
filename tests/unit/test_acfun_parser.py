"""
AcFun 파서 단위 테스트

검증 항목:
- JSON 필드 -> Comment 변환, timestamp는 항상 0
- 모드 매핑 및 지원하지 않는 모드 건너뛰기
- sequence는 원본 배열 인덱스
- 크기 배율 (raw * base / 25)
- 깨진 JSON / 배열이 아닌 문서 / 잘못된 타입은 CommentDecodeError
- null 필드는 기본값, 재귀 한도를 넘는 중첩은 CommentDecodeError
"""

from __future__ import annotations

import json

import pytest

from danmaku2ass.parser import DEFAULT_COLOR, CommentDecodeError, Position
from danmaku2ass.parser.acfun import parse_acfun


def _make_record(time=1.0, mode=1, size=25, color=16777215, content="text") -> dict:
    return {"time": time, "mode": mode, "size": size, "color": color, "content": content}


def _encode(*records: dict) -> bytes:
    return json.dumps(list(records), ensure_ascii=False).encode("utf-8")


def test_parse_basic_fields():
    content = _encode(_make_record(time=3.25, mode=5, size=25, color=255, content="弹幕"))

    comment = parse_acfun(content, 48.0)[0]

    assert comment.timeline == 3.25
    assert comment.timestamp == 0
    assert comment.sequence == 0
    assert comment.position is Position.TOP
    assert comment.color == 255
    assert comment.size == 48.0
    assert comment.text == "弹幕"


def test_size_scaling():
    """size=50, 기준 20 -> 40.0인지 확인합니다."""
    content = _encode(_make_record(size=50))
    assert parse_acfun(content, 20.0)[0].size == 40.0


def test_sequence_is_source_index_not_filtered_index():
    """건너뛴 레코드도 번호를 차지하는지 확인합니다."""
    content = _encode(
        _make_record(mode=9, content="skip"),
        _make_record(mode=1, content="a"),
        _make_record(mode=2, content="skip"),
        _make_record(mode=4, content="b"),
    )

    comments = parse_acfun(content, 25.0)

    assert [(c.text, c.sequence) for c in comments] == [("a", 1), ("b", 3)]
    assert [c.position for c in comments] == [Position.SCROLL, Position.BOTTOM]


def test_reverse_scroll_is_kept_by_parser():
    content = _encode(_make_record(mode=6))
    assert parse_acfun(content, 25.0)[0].position is Position.REVERSE_SCROLL


def test_missing_fields_use_defaults():
    content = b'[{"mode": 1}]'

    comment = parse_acfun(content, 25.0)[0]

    assert comment.timeline == 0.0
    assert comment.size == 25.0
    assert comment.color == DEFAULT_COLOR
    assert comment.text == ""


def test_literal_newline_normalized():
    content = _encode(_make_record(content="a/nb/nc"))
    comment = parse_acfun(content, 10.0)[0]
    assert comment.text == "a\nb\nc"
    assert comment.height == 30.0


def test_empty_array():
    assert parse_acfun(b"[]", 25.0) == []


@pytest.mark.parametrize(
    "content",
    [
        b'[{"time": 1.0, "mode": 1',
        b'{"time": 1.0}',
        b'[{"time": "soon", "mode": 1}]',
        b'[{"mode": 1, "content": ["not", "text"]}]',
        b"[1, 2, 3]",
    ],
)
def test_structural_errors_raise_decode_error(content):
    """구조가 깨지면 부분 결과 없이 CommentDecodeError가 발생하는지 확인합니다."""
    with pytest.raises(CommentDecodeError):
        parse_acfun(content, 25.0)


def test_deeply_nested_array_raises_decode_error():
    """재귀 한도를 넘는 중첩 배열도 CommentDecodeError로 변환되는지 확인합니다."""
    content = b"[" * 100000 + b"]" * 100000
    with pytest.raises(CommentDecodeError):
        parse_acfun(content, 25.0)


def test_null_fields_use_defaults():
    content = b'[{"time": 1.5, "mode": 1, "size": null, "color": null, "content": null}]'

    comment = parse_acfun(content, 25.0)[0]

    assert comment.timeline == 1.5
    assert comment.size == 25.0
    assert comment.color == DEFAULT_COLOR
    assert comment.text == ""


def test_null_mode_is_skipped_as_unsupported():
    content = b'[{"time": 1.0, "mode": null}, {"time": 2.0, "mode": 1}]'
    assert [c.sequence for c in parse_acfun(content, 25.0)] == [1]


def test_null_record_raises_decode_error():
    with pytest.raises(CommentDecodeError):
        parse_acfun(b"[null]", 25.0)

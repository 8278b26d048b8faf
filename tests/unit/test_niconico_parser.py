"""
Niconico 파서 단위 테스트

검증 항목:
- vpos(1/100초) -> timeline 변환, no/date 보존
- mail 명령 해석 (ue/shita/big/small/6자리 16진 색상)
- 같은 속성에 대한 명령은 마지막 토큰 우선
- 6자리가 아닌 숫자 토큰은 색상으로 보지 않음 ("184")
- 깨진 XML은 CommentDecodeError
"""

from __future__ import annotations

import pytest

from danmaku2ass.parser import DEFAULT_COLOR, CommentDecodeError, Position
from danmaku2ass.parser.niconico import (
    Instruction,
    NicoCommand,
    StyleAccumulator,
    compile_mail,
    parse_niconico,
)


# =============================================================================
# 테스트 헬퍼
# =============================================================================

def _make_chat(text: str = "コメント", vpos: str = "100", mail: str = "", **attributes: str) -> str:
    attrs = {"vpos": vpos, "no": "1", "date": "1234567890", "user_id": "user1", "mail": mail}
    attrs.update(attributes)
    rendered = " ".join(f'{key}="{value}"' for key, value in attrs.items())
    return f"<chat {rendered}>{text}</chat>"


def _make_document(*chats: str) -> bytes:
    body = "".join(chats)
    return f'<?xml version="1.0" encoding="UTF-8"?><packet>{body}</packet>'.encode("utf-8")


def _parse_single(mail: str, font_size: float = 48.0):
    comments = parse_niconico(_make_document(_make_chat(mail=mail)), font_size)
    assert len(comments) == 1
    return comments[0]


# =============================================================================
# 기본 변환 테스트
# =============================================================================

def test_parse_basic_fields():
    content = _make_document(_make_chat(text="テスト", vpos="12345", no="42", date="1300000000"))

    comment = parse_niconico(content, 48.0)[0]

    assert comment.timeline == 123.45
    assert comment.sequence == 42
    assert comment.timestamp == 1300000000
    assert comment.text == "テスト"


def test_defaults_without_commands():
    """명령이 없으면 SCROLL / 흰색 / 기준 크기인지 확인합니다."""
    comment = _parse_single("")
    assert comment.position is Position.SCROLL
    assert comment.color == DEFAULT_COLOR
    assert comment.size == 48.0


def test_missing_mail_attribute_uses_defaults():
    content = _make_document('<chat vpos="0" no="1" date="0">x</chat>')
    comment = parse_niconico(content, 30.0)[0]
    assert comment.position is Position.SCROLL
    assert comment.size == 30.0


def test_missing_vpos_is_skipped():
    content = _make_document('<chat no="1">skip</chat>', _make_chat(text="keep"))
    assert [c.text for c in parse_niconico(content, 48.0)] == ["keep"]


def test_non_numeric_vpos_is_skipped():
    content = _make_document(_make_chat(text="skip", vpos="abc"), _make_chat(text="keep"))
    assert [c.text for c in parse_niconico(content, 48.0)] == ["keep"]


# =============================================================================
# mail 명령 테스트
# =============================================================================

def test_ue_big_gives_top_and_scaled_size():
    """"ue big", 기준 48 -> TOP, 72.0인지 확인합니다."""
    comment = _parse_single("ue big", font_size=48.0)
    assert comment.position is Position.TOP
    assert comment.size == 72.0


def test_shita_small():
    comment = _parse_single("shita small", font_size=48.0)
    assert comment.position is Position.BOTTOM
    assert comment.size == 24.0


def test_three_digit_token_is_not_color():
    """"184"는 6자리가 아니므로 색상으로 해석하지 않는지 확인합니다."""
    comment = _parse_single("184", font_size=48.0)
    assert comment.position is Position.SCROLL
    assert comment.color == DEFAULT_COLOR
    assert comment.size == 48.0


def test_six_digit_hex_token_sets_color():
    comment = _parse_single("184 ff0000")
    assert comment.color == 0xFF0000


def test_last_token_wins_per_attribute():
    """같은 속성을 바꾸는 명령은 마지막 토큰이 우선하는지 확인합니다."""
    comment = _parse_single("ue shita big small 00ff00 0000FF")
    assert comment.position is Position.BOTTOM
    assert comment.size == 24.0
    assert comment.color == 0x0000FF


def test_commands_on_different_attributes_compose():
    comment = _parse_single("big ue 123456")
    assert comment.position is Position.TOP
    assert comment.size == 72.0
    assert comment.color == 0x123456


def test_big_is_not_cumulative():
    """big을 두 번 써도 기준 크기의 1.5배인지 확인합니다."""
    comment = _parse_single("big big", font_size=40.0)
    assert comment.size == 60.0


@pytest.mark.parametrize("token", ["0x1234", "+fffff", "ff_fff", "gggggg", "fffffff", "red"])
def test_invalid_color_tokens_ignored(token):
    comment = _parse_single(token)
    assert comment.color == DEFAULT_COLOR


def test_height_and_width_use_effective_size():
    content = _make_document(_make_chat(text="ab/ncd", mail="big"))
    comment = parse_niconico(content, 10.0)[0]
    assert comment.text == "ab\ncd"
    assert comment.height == 30.0
    assert comment.width == 75.0


# =============================================================================
# 명령 컴파일러 / 스타일 누적기 테스트
# =============================================================================

def test_compile_mail_produces_ordered_instructions():
    instructions = compile_mail("ue  184 big abcdef")
    assert instructions == [
        Instruction(NicoCommand.TOP),
        Instruction(NicoCommand.BIG),
        Instruction(NicoCommand.COLOR, 0xABCDEF),
    ]


def test_compile_mail_empty_string():
    assert compile_mail("") == []


def test_style_accumulator_applies_left_to_right():
    style = StyleAccumulator(font_size=20.0)
    style.apply_all([Instruction(NicoCommand.SMALL), Instruction(NicoCommand.BIG)])
    assert style.size == 30.0


# =============================================================================
# 구조 오류 테스트
# =============================================================================

def test_malformed_xml_raises_decode_error():
    content = b'<?xml version="1.0"?><packet><chat vpos="1">open'
    with pytest.raises(CommentDecodeError):
        parse_niconico(content, 48.0)

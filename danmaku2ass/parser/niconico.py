"""
Niconico XML 탄막 파서입니다.

입력 예시:
    <?xml version="1.0" encoding="UTF-8"?>
    <packet>
      <chat vpos="100" no="1" date="1234567890" user_id="user1" mail="ue big ff0000">탄막 내용</chat>
    </packet>

속성:
    vpos: 영상 위치 (1/100초)
    no: 탄막 순번
    date: 작성 시각 (UNIX 초)
    user_id: 작성자 (사용하지 않음)
    mail: 공백으로 구분된 명령 문자열

mail 명령:
    ue      상단 고정
    shita   하단 고정
    big     폰트 크기 x1.5
    small   폰트 크기 x0.5
    RRGGBB  정확히 6자리 16진수 색상
    그 외 토큰은 무시합니다. 같은 속성을 바꾸는 명령은 마지막 토큰이 우선합니다.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional

from danmaku2ass.parser import DEFAULT_COLOR, Comment, Position
from danmaku2ass.parser.common import build_comment, decode_xml
from danmaku2ass.parser.text_metrics import TextMeasure, calculate_length

logger = logging.getLogger(__name__)

# vpos 단위 (1/100초)
VPOS_PER_SECOND = 100.0

BIG_SCALE = 1.5
SMALL_SCALE = 0.5

_HEX_COLOR = re.compile(r"[0-9A-Fa-f]{6}")


class NicoCommand(Enum):
    """mail 문자열에서 해석되는 명령 종류입니다."""
    TOP = "ue"
    BOTTOM = "shita"
    BIG = "big"
    SMALL = "small"
    COLOR = "color"


class Instruction(NamedTuple):
    """명령 1개와 그 인자 (COLOR일 때만 RGB 값)."""
    command: NicoCommand
    argument: Optional[int] = None


_KEYWORDS = {
    command.value: command
    for command in NicoCommand
    if command is not NicoCommand.COLOR
}


def compile_mail(mail: str) -> list[Instruction]:
    """
    mail 문자열을 명령 목록으로 변환합니다.

    인식할 수 없는 토큰은 버립니다.

    사용 예시:
        >>> [i.command for i in compile_mail("ue big 184")]
        [<NicoCommand.TOP: 'ue'>, <NicoCommand.BIG: 'big'>]
    """
    instructions: list[Instruction] = []
    for token in mail.split(" "):
        command = _KEYWORDS.get(token)
        if command is not None:
            instructions.append(Instruction(command))
        elif _HEX_COLOR.fullmatch(token):
            instructions.append(Instruction(NicoCommand.COLOR, int(token, 16)))
    return instructions


@dataclass
class StyleAccumulator:
    """
    명령을 왼쪽부터 차례로 적용받는 가변 스타일 상태입니다.

    필드:
        font_size: 기준 폰트 크기 (big/small 배율의 기준, 누적되지 않음)
        position: 현재 위치 (기본 SCROLL)
        color: 현재 색상 (기본 흰색)
        size: 현재 실효 폰트 크기
    """
    font_size: float
    position: Position = Position.SCROLL
    color: int = DEFAULT_COLOR
    size: float = field(init=False)

    def __post_init__(self) -> None:
        self.size = self.font_size

    def apply(self, instruction: Instruction) -> None:
        command = instruction.command
        if command is NicoCommand.TOP:
            self.position = Position.TOP
        elif command is NicoCommand.BOTTOM:
            self.position = Position.BOTTOM
        elif command is NicoCommand.BIG:
            self.size = self.font_size * BIG_SCALE
        elif command is NicoCommand.SMALL:
            self.size = self.font_size * SMALL_SCALE
        elif command is NicoCommand.COLOR:
            self.color = instruction.argument

    def apply_all(self, instructions: list[Instruction]) -> "StyleAccumulator":
        for instruction in instructions:
            self.apply(instruction)
        return self


def _to_int(value: Optional[str], default: Optional[int] = None) -> Optional[int]:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return None


def parse_niconico(
    content: bytes | str,
    font_size: float,
    measure: TextMeasure = calculate_length,
) -> list[Comment]:
    """
    Niconico XML 문서를 Comment 목록으로 변환합니다.

    - vpos가 없거나 정수가 아닌 레코드는 건너뜀
    - no/date가 없으면 0, 정수가 아니면 레코드를 건너뜀
    - sequence는 원본의 no 값

    에러:
        CommentDecodeError: XML 구조가 깨졌을 때
    """
    root = decode_xml(content, "niconico")

    comments: list[Comment] = []
    skipped_count = 0

    for element in root.iter("chat"):
        vpos = _to_int(element.get("vpos"))
        number = _to_int(element.get("no"), default=0)
        date = _to_int(element.get("date"), default=0)
        if vpos is None or number is None or date is None:
            skipped_count += 1
            continue

        style = StyleAccumulator(font_size=font_size).apply_all(
            compile_mail(element.get("mail", ""))
        )

        comments.append(
            build_comment(
                timeline=vpos / VPOS_PER_SECOND,
                timestamp=date,
                sequence=number,
                raw_text=element.text or "",
                position=style.position,
                size=style.size,
                color=style.color,
                measure=measure,
            )
        )

    logger.debug(f"Niconico 파싱 완료: {len(comments)}개 변환, {skipped_count}개 건너뜀")
    return comments

"""
ASS 자막 파일 쓰기 모듈입니다.

역할:
- [Script Info] / [V4+ Styles] / [Events] 헤더 작성
- SubtitleEvent를 Dialogue 줄로 작성 (텍스트는 이스케이프하지 않음)
- 탄막 목록을 받아 합성부터 저장까지 한 번에 처리 (generate_ass)

사용 예시:
    >>> writer = AssWriter(config.subtitle)
    >>> writer.export(events, "output/comments.ass")
    >>> generate_ass(comments, "output/comments.ass", config.subtitle)
"""

from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Iterable, TextIO

from danmaku2ass.config.schema import SubtitleConfig
from danmaku2ass.parser import Comment
from danmaku2ass.subtitle import SubtitleEvent
from danmaku2ass.subtitle.synthesizer import STYLE_NAMES, EventSynthesizer

logger = logging.getLogger(__name__)

_SCRIPT_INFO_TEMPLATE = """\
[Script Info]
ScriptType: v4.00+
PlayResX: {width}
PlayResY: {height}
Aspect Ratio: {aspect_ratio:f}
Collisions: Normal
WrapStyle: 2
ScaledBorderAndShadow: yes

[V4+ Styles]
Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, Alignment, MarginL, MarginR, MarginV, Encoding
"""

_STYLE_TEMPLATE = (
    "Style: {name},{font_name},{font_size:f},&H{colour:X},&H{colour:X},"
    "&H000000,&H000000,0,0,0,0,100,100,0,0,1,2,0,2,20,20,2,0\n"
)

_EVENTS_HEADER = (
    "\n[Events]\n"
    "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text\n"
)

_DIALOGUE_TEMPLATE = (
    "Dialogue: 0,{start},{end},{style},,{margin_l},{margin_r},{margin_v},{effect},{text}\n"
)


class AssWriter:
    """
    SubtitleEvent 목록을 ASS 포맷으로 쓰는 클래스입니다.

    파일 저장 실패 시 OSError를 상위로 전파합니다.
    """

    def __init__(self, config: SubtitleConfig) -> None:
        """
        파라미터:
            config (SubtitleConfig): 해상도, 폰트, 투명도 설정
        """
        self._config = config

    def alpha_colour(self) -> int:
        """투명도를 상위 바이트에 담은 색상 값을 반환합니다 (int(alpha*255) << 24)."""
        return int(self._config.alpha * 255) << 24

    def write_header(self, stream: TextIO) -> None:
        """스크립트 정보, 스타일 3종, 이벤트 포맷 줄을 씁니다."""
        config = self._config
        stream.write(
            _SCRIPT_INFO_TEMPLATE.format(
                width=config.width,
                height=config.height,
                aspect_ratio=config.aspect_ratio,
            )
        )

        colour = self.alpha_colour()
        for name in STYLE_NAMES:
            stream.write(
                _STYLE_TEMPLATE.format(
                    name=name,
                    font_name=config.font_name,
                    font_size=config.font_size,
                    colour=colour,
                )
            )

        stream.write(_EVENTS_HEADER)

    def write_events(self, stream: TextIO, events: Iterable[SubtitleEvent]) -> int:
        """
        이벤트를 주어진 순서대로 Dialogue 줄로 씁니다.

        반환값:
            int: 작성한 줄 수
        """
        count = 0
        for event in events:
            stream.write(
                _DIALOGUE_TEMPLATE.format(
                    start=format_time(event.start),
                    end=format_time(event.end),
                    style=event.style,
                    margin_l=event.margin_l,
                    margin_r=event.margin_r,
                    margin_v=event.margin_v,
                    effect=event.effect,
                    text=event.text,
                )
            )
            count += 1
        return count

    def write(self, stream: TextIO, events: Iterable[SubtitleEvent]) -> int:
        """헤더와 이벤트를 이어서 씁니다."""
        self.write_header(stream)
        return self.write_events(stream, events)

    def export(self, events: Iterable[SubtitleEvent], filepath: str | Path) -> None:
        """
        이벤트 목록을 ASS 파일로 저장합니다.

        파라미터:
            events: 시간순으로 정렬된 SubtitleEvent 목록
            filepath: 저장할 .ass 파일 경로
        """
        filepath = Path(filepath)

        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            with open(filepath, "w", encoding="utf-8") as f:
                count = self.write(f, events)

            logger.info(f"ASS 파일 저장 완료: {filepath} ({count}개 자막)")

        except OSError as exc:
            logger.error(f"ASS 파일 저장 실패: {filepath}, 오류: {exc}")
            raise


def generate_ass(
    comments: Iterable[Comment],
    output: str | Path | TextIO,
    config: SubtitleConfig,
) -> None:
    """
    탄막 목록으로 이벤트를 합성하고 ASS 형식으로 씁니다.

    파라미터:
        comments: 모든 입력 파일에서 합쳐진 Comment
        output: 저장할 파일 경로 또는 쓰기용 텍스트 스트림
        config: 자막 설정 (duration은 합성에, 나머지는 헤더에 사용)

    에러:
        OSError: 출력 쓰기 실패 시
    """
    events = EventSynthesizer(config.duration).synthesize(comments)
    writer = AssWriter(config)

    if isinstance(output, (str, Path)):
        writer.export(events, output)
    else:
        count = writer.write(output, events)
        logger.info(f"ASS 스트림 쓰기 완료: {count}개 자막")


# =============================================================================
# 헬퍼 함수
# =============================================================================

def format_time(seconds: float) -> str:
    """
    초 단위 시각을 ASS 시간 포맷으로 변환합니다.

    ASS 포맷: H:MM:SS.cc (시간은 자릿수 제한 없음, 센티초는 버림)

    float 이진 오차로 1.15초가 1.14초가 되지 않도록
    값의 10진 표현(repr)을 기준으로 자릅니다.

    파라미터:
        seconds: 초 단위 시각 (음수는 0으로 처리)

    반환값:
        str: ASS 시간 문자열 (예: 3661.5 -> "1:01:01.50")
    """
    total = max(Decimal(0), Decimal(repr(float(seconds))))
    whole_seconds = int(total)
    centiseconds = int((total - whole_seconds) * 100)

    hours, remainder = divmod(whole_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:d}:{minutes:02d}:{secs:02d}.{centiseconds:02d}"

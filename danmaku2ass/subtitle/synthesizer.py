"""
탄막 -> 자막 이벤트 합성 모듈입니다.

역할:
- 여러 파일에서 합쳐진 Comment를 timeline 기준으로 안정 정렬
- 위치별 스타일 이름 지정 (SCROLL=R2L, TOP=Top, BOTTOM=Bottom)
- 고정 표시 시간으로 start/end 계산

REVERSE_SCROLL 탄막은 대응 스타일이 없어 출력에서 제외됩니다.
충돌 회피(트랙 배정)는 하지 않습니다.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable

from danmaku2ass.parser import Comment, Position
from danmaku2ass.subtitle import SubtitleEvent

logger = logging.getLogger(__name__)

STYLE_R2L = "R2L"
STYLE_TOP = "Top"
STYLE_BOTTOM = "Bottom"

# 헤더에 정의되는 스타일 순서
STYLE_NAMES = (STYLE_R2L, STYLE_TOP, STYLE_BOTTOM)

STYLE_BY_POSITION = MappingProxyType({
    Position.SCROLL: STYLE_R2L,
    Position.TOP: STYLE_TOP,
    Position.BOTTOM: STYLE_BOTTOM,
})


class EventSynthesizer:
    """
    Comment 목록을 시간순 SubtitleEvent 목록으로 변환합니다.

    Comment는 변경하지 않으며, 입력 리스트의 순서도 바꾸지 않습니다.

    사용 예시:
        >>> synthesizer = EventSynthesizer(duration=5.0)
        >>> events = synthesizer.synthesize(comments)
    """

    def __init__(self, duration: float) -> None:
        """
        파라미터:
            duration (float): 모든 이벤트에 적용되는 고정 표시 시간 (초)
        """
        self._duration = duration

    @property
    def duration(self) -> float:
        return self._duration

    def synthesize(self, comments: Iterable[Comment]) -> list[SubtitleEvent]:
        """
        Comment를 timeline 오름차순으로 정렬하여 이벤트로 변환합니다.

        같은 timeline의 Comment는 입력 순서를 유지합니다 (sorted는 안정 정렬).

        파라미터:
            comments: 모든 입력 파일에서 합쳐진 Comment

        반환값:
            list[SubtitleEvent]: 시간순 이벤트 목록
        """
        ordered = sorted(comments, key=lambda comment: comment.timeline)

        events: list[SubtitleEvent] = []
        for comment in ordered:
            style = STYLE_BY_POSITION.get(comment.position)
            if style is None:
                continue

            events.append(
                SubtitleEvent(
                    start=comment.timeline,
                    end=comment.timeline + self._duration,
                    style=style,
                    text=comment.text,
                )
            )

        dropped = len(ordered) - len(events)
        logger.debug(f"이벤트 합성 완료: {len(events)}개 생성, 스타일 없는 탄막 {dropped}개 제외")
        return events


def synthesize_events(comments: Iterable[Comment], duration: float) -> list[SubtitleEvent]:
    """EventSynthesizer(duration).synthesize(comments)의 단축 함수입니다."""
    return EventSynthesizer(duration).synthesize(comments)

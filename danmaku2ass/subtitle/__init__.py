"""
자막 모듈 패키지

공통 데이터 타입:
- SubtitleEvent: ASS Dialogue 한 줄에 대응하는 자막 이벤트 컨테이너
"""

from dataclasses import dataclass


@dataclass
class SubtitleEvent:
    """
    ASS 자막 이벤트 컨테이너입니다.

    EventSynthesizer가 Comment 1개당 1개씩 생성하고, AssWriter가 바로 소비합니다.

    필드:
        start: 표시 시작 시각 (초)
        end: 표시 종료 시각 (초)
        style: 스타일 이름 ("R2L" | "Top" | "Bottom")
        text: 표시할 텍스트 (이스케이프하지 않음)
        margin_l: 왼쪽 여백
        margin_r: 오른쪽 여백
        margin_v: 세로 여백
        effect: 효과 이름
    """
    start: float
    end: float
    style: str
    text: str
    margin_l: int = 0
    margin_r: int = 0
    margin_v: int = 0
    effect: str = ""

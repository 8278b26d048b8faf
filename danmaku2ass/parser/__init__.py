"""
탄막 파서 패키지

공통 데이터 타입:
- Position: 표준 표시 위치 (스크롤/상단/하단/역방향 스크롤)
- FormatTag: 포맷 탐지 결과 태그
- Comment: 모든 플랫폼 파서가 생성하는 표준 탄막 컨테이너

공통 에러:
- DanmakuError: 파서 패키지 에러의 기본 클래스
- UnrecognizedFormatError: 포맷 탐지 실패
- UnsupportedFormatError: 디스패처에 알 수 없는 태그 전달
- CommentDecodeError: XML/JSON 구조 디코딩 실패 (파일 전체 실패)
"""

from dataclasses import dataclass
from enum import Enum, IntEnum

# 색상 미지정 시 기본값 (흰색)
DEFAULT_COLOR = 0xFFFFFF


class Position(IntEnum):
    """
    탄막의 표준 표시 위치입니다.

    REVERSE_SCROLL은 모델에는 존재하지만 현재 대응하는 ASS 스타일이 없어
    이벤트 합성 단계에서 제외됩니다.
    """
    SCROLL = 0
    TOP = 1
    BOTTOM = 2
    REVERSE_SCROLL = 3


class FormatTag(str, Enum):
    """포맷 탐지기가 반환하는 탄막 파일 포맷 태그입니다."""
    BILIBILI = "Bilibili"
    NICONICO = "Niconico"
    ACFUN = "Acfun"


@dataclass(frozen=True)
class Comment:
    """
    표준 탄막 컨테이너입니다.

    각 플랫폼 파서가 생성하며, 생성 후에는 변경되지 않습니다.

    필드:
        timeline: 영상 시작 기준 표시 시각 (초)
        timestamp: 원본 작성 시각 (UNIX 초, 포맷에 없으면 0)
        sequence: 원본 파일 내 순번
        text: 표시 텍스트 ("/n"은 실제 줄바꿈으로 정규화됨)
        position: 표시 위치
        color: RGB 정수 (0xRRGGBB)
        size: 실효 폰트 크기
        height: 예상 높이 (줄 수 * size)
        width: 예상 너비 (문자 폭 * size)
    """
    timeline: float
    timestamp: int
    sequence: int
    text: str
    position: Position
    color: int
    size: float
    height: float
    width: float


class DanmakuError(Exception):
    """탄막 처리 중 발생하는 에러의 기본 클래스입니다."""
    pass


class UnrecognizedFormatError(DanmakuError):
    """파일 앞부분으로 포맷을 판별할 수 없을 때 발생하는 에러입니다."""
    pass


class UnsupportedFormatError(DanmakuError):
    """디스패처가 처리할 파서가 없는 포맷 태그를 받았을 때 발생하는 에러입니다."""
    pass


class CommentDecodeError(DanmakuError):
    """문서 구조가 깨져 파일 전체를 해석할 수 없을 때 발생하는 에러입니다."""
    pass

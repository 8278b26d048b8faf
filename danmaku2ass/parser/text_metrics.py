"""
텍스트 크기 추정 모듈입니다.

실제 폰트 메트릭이 아닌 문자 수 기반 휴리스틱입니다.
파서는 measure 인자로 측정 함수를 주입받으므로, 실제 글리프 폭 계산으로
교체하더라도 파서나 합성기를 수정할 필요가 없습니다.
"""

from __future__ import annotations

from typing import Callable

# 텍스트 -> 폭(폰트 크기 1 기준) 측정 함수 타입
TextMeasure = Callable[[str], float]

# 원본 포맷에서 줄바꿈을 나타내는 두 글자 표기
LITERAL_NEWLINE = "/n"


def calculate_length(text: str) -> float:
    """텍스트의 코드 포인트 수를 폭으로 반환합니다."""
    return float(len(text))


def normalize_text(text: str) -> str:
    """문자 그대로의 "/n" 표기를 실제 줄바꿈으로 바꿉니다."""
    return text.replace(LITERAL_NEWLINE, "\n")


def measure_box(
    text: str,
    size: float,
    measure: TextMeasure = calculate_length,
) -> tuple[float, float]:
    """
    정규화된 텍스트의 예상 (높이, 너비)를 계산합니다.

    파라미터:
        text: 줄바꿈이 정규화된 텍스트
        size: 실효 폰트 크기
        measure: 폭 측정 함수

    반환값:
        tuple[float, float]: (줄 수 * size, 측정 폭 * size)
    """
    height = float(text.count("\n") + 1) * size
    width = measure(text) * size
    return height, width

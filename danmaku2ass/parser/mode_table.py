"""
플랫폼별 모드 코드 -> 표준 위치 매핑 테이블입니다.

매핑에 없는 코드는 lookup()이 None을 반환하고, 파서는 해당 레코드를 건너뜁니다.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

from danmaku2ass.parser import Position


class ModeTable:
    """
    읽기 전용 모드 코드 매핑입니다.

    생성 시점에 키는 int, 값은 Position인지 검증합니다.

    사용 예시:
        >>> table = ModeTable("bilibili", {1: Position.SCROLL})
        >>> table.lookup(1)
        <Position.SCROLL: 0>
        >>> table.lookup(9) is None
        True
    """

    def __init__(self, platform: str, mapping: Mapping[int, Position]) -> None:
        for code, position in mapping.items():
            if isinstance(code, bool) or not isinstance(code, int):
                raise TypeError(f"{platform} 모드 코드는 int여야 합니다: {code!r}")
            if not isinstance(position, Position):
                raise TypeError(
                    f"{platform} 모드 {code}의 위치가 Position이 아닙니다: {position!r}"
                )

        self._platform = platform
        self._mapping: Mapping[int, Position] = MappingProxyType(dict(mapping))

    @property
    def platform(self) -> str:
        return self._platform

    @property
    def codes(self) -> frozenset[int]:
        """지원하는 모드 코드 집합을 반환합니다."""
        return frozenset(self._mapping)

    def lookup(self, code: Any) -> Optional[Position]:
        """
        모드 코드에 대응하는 위치를 반환합니다.

        정수로 해석할 수 없거나 매핑에 없는 코드는 None을 반환합니다.
        """
        if isinstance(code, bool):
            return None
        if isinstance(code, str):
            try:
                code = int(code)
            except ValueError:
                return None
        if not isinstance(code, int):
            return None
        return self._mapping.get(code)

    def __contains__(self, code: object) -> bool:
        return self.lookup(code) is not None

    def __repr__(self) -> str:
        return f"ModeTable({self._platform!r}, {dict(self._mapping)!r})"


# Bilibili: 1=스크롤, 4=하단, 5=상단, 6=역방향 스크롤
BILIBILI_MODES = ModeTable(
    "bilibili",
    {
        1: Position.SCROLL,
        4: Position.BOTTOM,
        5: Position.TOP,
        6: Position.REVERSE_SCROLL,
    },
)

# AcFun은 Bilibili와 같은 모드 체계를 사용
ACFUN_MODES = ModeTable(
    "acfun",
    {
        1: Position.SCROLL,
        4: Position.BOTTOM,
        5: Position.TOP,
        6: Position.REVERSE_SCROLL,
    },
)

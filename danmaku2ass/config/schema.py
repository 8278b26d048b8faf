"""
danmaku2ass 설정 스키마 정의 모듈입니다.

역할:
- Pydantic v2 BaseModel 기반으로 config.yaml의 전체 구조를 타입 안전하게 정의
- system(로깅), subtitle(ASS 렌더링) 섹션을 독립적인 중첩 모델로 분리
- 필드별 기본값, 허용 범위, 유효성 검증(validator)을 포함
- 모든 모델은 frozen으로 생성 후 변경 불가 (합성기/직렬화기에 그대로 전달)

사용 예시:
    >>> from danmaku2ass.config.schema import AppConfig
    >>> config = AppConfig(**yaml_data)
    >>> print(config.subtitle.font_name)
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

# 모듈 로거 설정
logger = logging.getLogger(__name__)


# =============================================================================
# system 섹션: 로깅 및 세션 설정
# =============================================================================

class SystemConfig(BaseModel):
    """
    시스템 전역 설정을 정의하는 모델입니다.

    역할:
    - 로깅 레벨 및 포맷 지정
    - 로그 파일 디렉토리 지정 (비어 있으면 콘솔 출력만 사용)
    - 세션 식별자 관리
    """
    model_config = ConfigDict(frozen=True)

    # 로그 출력 레벨
    log_level: str = Field(default="INFO", description="로그 레벨 (DEBUG | INFO | WARNING | ERROR)")
    # 로그 출력 포맷
    log_format: str = Field(default="text", description="로그 포맷 (json | text)")
    # 로그 파일 저장 디렉토리 경로 (빈 문자열이면 파일 핸들러 생략)
    log_dir: str = Field(default="", description="로그 저장 디렉토리 (비어있으면 콘솔만)")
    # 세션 고유 식별자 (빈 문자열이면 UUID로 자동 생성)
    session_id: str = Field(default="", description="세션 ID (비어있으면 UUID 자동생성)")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """로그 레벨이 유효한 Python 로깅 레벨인지 검증합니다."""
        allowed_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        # 대소문자 구분 없이 비교 후 대문자로 정규화
        upper_value = value.upper()
        if upper_value not in allowed_levels:
            error_message = f"log_level은 {allowed_levels} 중 하나여야 합니다. 입력값: '{value}'"
            raise ValueError(error_message)
        return upper_value

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, value: str) -> str:
        """로그 포맷이 지원되는 형식인지 검증합니다."""
        allowed_formats = ("json", "text")
        if value not in allowed_formats:
            error_message = f"log_format은 {allowed_formats} 중 하나여야 합니다. 입력값: '{value}'"
            raise ValueError(error_message)
        return value


# =============================================================================
# subtitle 섹션: ASS 자막 렌더링 설정
# =============================================================================

class SubtitleConfig(BaseModel):
    """
    ASS 자막 생성에 쓰이는 프로세스 전역 설정입니다.

    역할:
    - 화면 해상도(PlayResX/PlayResY) 지정
    - 스타일 테이블의 폰트 이름/크기 및 투명도 지정
    - 모든 탄막에 동일하게 적용되는 고정 표시 시간 지정

    font_size는 파서에도 기준 폰트 크기로 전달되어 플랫폼별 크기 배율의 기준이 됩니다.
    float 필드는 무한대/NaN을 허용하지 않습니다 (ASS 시간 포맷으로 변환할 수 없음).
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    # 비디오 가로 해상도 (픽셀)
    width: int = Field(default=320, gt=0, description="화면 가로 크기")
    # 비디오 세로 해상도 (픽셀)
    height: int = Field(default=240, gt=0, description="화면 세로 크기")
    # 스타일에 사용할 폰트 이름
    font_name: str = Field(default="MS PGothic", description="폰트 이름")
    # 기준 폰트 크기
    font_size: float = Field(default=48.0, gt=0, description="기준 폰트 크기")
    # 자막 투명도 (0.0~1.0, 색상 필드 상위 바이트에 인코딩)
    alpha: float = Field(default=0.8, description="투명도 (0.0~1.0)")
    # 탄막 1개의 고정 표시 시간 (초)
    duration: float = Field(default=5.0, gt=0, description="탄막 표시 시간 (초)")
    # 표시 시간 여유값 (초)
    margin_start: float = Field(default=5.0, ge=0, description="표시 시간 여유값 (초)")

    @field_validator("alpha")
    @classmethod
    def validate_alpha(cls, value: float) -> float:
        """투명도가 0.0~1.0 범위인지 검증합니다."""
        if not 0.0 <= value <= 1.0:
            error_message = f"alpha는 0.0~1.0 범위여야 합니다. 입력값: {value}"
            raise ValueError(error_message)
        return value

    @property
    def aspect_ratio(self) -> float:
        """화면 비율 (width / height)을 반환합니다."""
        return self.width / self.height


# =============================================================================
# 최상위 AppConfig: 모든 섹션을 통합하는 루트 모델
# =============================================================================

class AppConfig(BaseModel):
    """
    애플리케이션 전체 설정을 통합하는 최상위 모델입니다.

    역할:
    - config.yaml의 모든 섹션을 하나의 타입 안전한 객체로 통합
    - 각 섹션이 누락된 경우 기본값으로 자동 생성

    사용 예시:
        >>> config = AppConfig(**{"subtitle": {"width": 1920, "height": 1080}})
        >>> config.subtitle.aspect_ratio
        1.7777777777777777
    """
    model_config = ConfigDict(frozen=True)

    # 시스템 전역 설정
    system: SystemConfig = Field(default_factory=SystemConfig, description="시스템 설정")
    # ASS 자막 설정
    subtitle: SubtitleConfig = Field(default_factory=SubtitleConfig, description="자막 설정")

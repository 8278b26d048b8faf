"""
danmaku2ass 커맨드라인 진입점

역할:
- 커맨드라인 인자 해석 및 설정(config.yaml, 환경변수) 병합
- 입력 파일마다 포맷 탐지 -> 파싱, 실패한 파일은 로그를 남기고 건너뜀
- 모든 탄막을 합쳐 ASS 파일 1개로 저장
- 출력 쓰기 실패 시 종료 코드 1

실행 예시:
    danmaku2ass -s 1920x1080 -fs 36 -o out.ass bilibili.xml niconico.xml
    danmaku2ass --config config.yaml acfun.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence

from danmaku2ass.config.config_manager import ConfigLoadError, ConfigManager, parse_screen_size
from danmaku2ass.config.schema import AppConfig
from danmaku2ass.logging.structured_logger import setup_logging
from danmaku2ass.parser import Comment, DanmakuError
from danmaku2ass.parser.dispatcher import parse_comments
from danmaku2ass.parser.probe import probe_format
from danmaku2ass.subtitle.ass_writer import generate_ass

logger = logging.getLogger(__name__)

# 출력 파일 확장자
OUTPUT_SUFFIX = ".ass"


@dataclass
class ConversionReport:
    """
    변환 결과 요약입니다.

    필드:
        converted: 파싱에 성공한 입력 파일 경로
        failed: (입력 파일 경로, 실패 사유) 목록
        comment_count: 합쳐진 탄막 수
    """
    converted: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)
    comment_count: int = 0


def load_comments(
    inputs: Iterable[str | Path],
    font_size: float,
    report: Optional[ConversionReport] = None,
) -> list[Comment]:
    """
    입력 파일을 순서대로 탐지/파싱하여 탄막을 하나의 목록으로 합칩니다.

    파일 열기 실패, 포맷 탐지 실패, 구조 디코딩 실패는 해당 파일만 건너뜁니다.

    파라미터:
        inputs: 입력 파일 경로 목록
        font_size: 기준 폰트 크기
        report: 결과를 기록할 ConversionReport (None이면 기록하지 않음)

    반환값:
        list[Comment]: 입력 순서대로 이어 붙인 탄막 목록
    """
    all_comments: list[Comment] = []

    for input_path in inputs:
        input_path = str(input_path)
        try:
            with open(input_path, "rb") as input_file:
                format_tag = probe_format(input_file)
                content = input_file.read()
            comments = parse_comments(content, format_tag, font_size)

        except OSError as exc:
            logger.error(f"입력 파일 열기 실패: {input_path}, 오류: {exc}")
            if report is not None:
                report.failed.append((input_path, str(exc)))
            continue

        except DanmakuError as exc:
            logger.error(f"입력 파일 처리 실패: {input_path}, 오류: {exc}")
            if report is not None:
                report.failed.append((input_path, str(exc)))
            continue

        logger.info(f"입력 파일 파싱 완료: {input_path} ({format_tag.value}, {len(comments)}개)")
        all_comments.extend(comments)
        if report is not None:
            report.converted.append(input_path)

    if report is not None:
        report.comment_count = len(all_comments)
    return all_comments


def convert(
    inputs: Sequence[str | Path],
    output: str | Path,
    config: AppConfig,
) -> ConversionReport:
    """
    입력 파일 전체를 읽어 ASS 파일 1개를 생성합니다.

    에러:
        OSError: 출력 파일 쓰기 실패 시
    """
    report = ConversionReport()
    comments = load_comments(inputs, config.subtitle.font_size, report)
    generate_ass(comments, output, config.subtitle)
    return report


def default_output_path(first_input: str | Path) -> str:
    """첫 번째 입력 파일 이름의 확장자를 .ass로 바꾼 경로를 반환합니다 (현재 디렉토리 기준)."""
    return Path(first_input).with_suffix(OUTPUT_SUFFIX).name


# =============================================================================
# 진입점
# =============================================================================

def _build_arg_parser() -> argparse.ArgumentParser:
    """커맨드라인 인자 파서를 생성합니다."""
    parser = argparse.ArgumentParser(
        prog="danmaku2ass",
        description="Bilibili / Niconico / AcFun 탄막 파일을 ASS 자막으로 변환합니다",
    )
    parser.add_argument("inputs", nargs="+", help="입력 탄막 파일 목록")
    parser.add_argument("-o", dest="output", help="출력 파일 경로 (기본: 첫 입력 파일명.ass)")
    parser.add_argument("-s", dest="screen_size", help="화면 크기 WIDTHxHEIGHT (기본: 320x240)")
    parser.add_argument("-fn", dest="font_name", help="폰트 이름 (기본: MS PGothic)")
    parser.add_argument("-fs", dest="font_size", type=float, help="폰트 크기 (기본: 48)")
    parser.add_argument("-a", dest="alpha", type=float, help="투명도 0~1 (기본: 0.8)")
    parser.add_argument("-dm", dest="margin_start", type=float, help="표시 시간 여유값 (기본: 5)")
    parser.add_argument("-ds", dest="duration", type=float, help="탄막 표시 시간 (기본: 5)")
    parser.add_argument("--config", help="YAML 설정 파일 경로")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="로그 레벨 (설정 파일 오버라이드)",
    )
    return parser


def _resolve_config(args: argparse.Namespace) -> AppConfig:
    """
    설정 파일 -> 환경변수 -> 커맨드라인 인자 순서로 병합한 설정을 만듭니다.

    에러:
        ConfigLoadError: 설정 파일 로드/검증 실패 시
        ValueError: 화면 크기 형식 오류 또는 인자 값 검증 실패 시 (pydantic ValidationError 포함)
    """
    manager = ConfigManager()
    config = manager.load(args.config) if args.config else manager.build()

    # Pydantic 모델은 불변이므로 dict로 재구성 후 다시 검증
    overrides: dict = {}
    if args.screen_size:
        overrides["width"], overrides["height"] = parse_screen_size(args.screen_size)
    for name in ("font_name", "font_size", "alpha", "duration", "margin_start"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value

    config_dict = config.model_dump()
    config_dict["subtitle"].update(overrides)
    if args.log_level:
        config_dict["system"]["log_level"] = args.log_level
    return AppConfig(**config_dict)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    커맨드라인 진입점입니다.

    반환값:
        int: 종료 코드 (0=성공, 1=인자/설정 오류 또는 출력 실패)
    """
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = _resolve_config(args)
    except (ConfigLoadError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    session_id = setup_logging(config)

    output = args.output or default_output_path(args.inputs[0])
    logger.info(
        f"danmaku2ass 시작: session={session_id}, inputs={len(args.inputs)}, output={output}, "
        f"resolution={config.subtitle.width}x{config.subtitle.height}"
    )

    try:
        report = convert(args.inputs, output, config)
    except OSError as exc:
        logger.error(f"ASS 파일 생성 실패: {exc}")
        return 1

    if report.failed:
        logger.warning(f"처리하지 못한 입력 파일 {len(report.failed)}개")

    print(f"Successfully converted to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

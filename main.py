"""
danmaku2ass 실행 스크립트

설치 없이 저장소 루트에서 실행할 때 사용합니다.

실행 예시:
    python main.py -s 1920x1080 -o out.ass comments.xml
"""

import sys

from danmaku2ass.cli import main

if __name__ == "__main__":
    sys.exit(main())

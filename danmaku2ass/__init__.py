"""
danmaku2ass: 탄막(Bilibili / Niconico / AcFun) 파일을 ASS 자막으로 변환하는 패키지
"""

__version__ = "0.1.0"

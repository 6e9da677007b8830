#!/usr/bin/env python3
"""
도서 추천기 메인 실행 파일
========================

이 파일은 도서 추천기의 메인 진입점입니다.
CSV 카탈로그를 로드하고 대화형 콘솔을 실행합니다.

사용법:
    python main.py [--data data.csv] [--cache-dir ./cache] [--top 10] [--rebuild]

작성자: AI Assistant
버전: 1.0.0
"""

import os
from pathlib import Path

from bookrec.ui.console import cli


def main():
    """
    메인 실행 함수
    """
    print("🚀 도서 추천기를 시작합니다...")

    # 현재 디렉토리를 스크립트가 있는 디렉토리로 변경 (상대 경로 설정 기준)
    os.chdir(Path(__file__).parent)

    cli()


if __name__ == "__main__":
    main()

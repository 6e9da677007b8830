"""
도우미 함수 모듈
===============

이 모듈은 애플리케이션 전반에서 사용되는 일반적인 도우미 함수들을 제공합니다.

주요 기능:
- 문자열 정리 및 제목 정규화
- 점수/시간 포맷팅
- 원자적 파일 저장

작성자: AI Assistant
버전: 1.0.0
"""

import os
import re
import tempfile


def clean_text(text: str) -> str:
    """
    텍스트를 정리하는 함수 (앞뒤 공백 제거, 연속 공백 정리)

    Args:
        text (str): 정리할 텍스트

    Returns:
        str: 정리된 텍스트
    """
    if not text:
        return ""

    # 앞뒤 공백 제거
    text = text.strip()

    # 연속된 공백을 하나로 변경
    text = re.sub(r'\s+', ' ', text)

    return text


def normalize_title(title: str) -> str:
    """
    제목 인덱스 키로 사용할 정규화된 제목 반환 (대소문자 무시)

    Args:
        title (str): 원본 제목

    Returns:
        str: 소문자로 변환된 제목
    """
    return clean_text(title).lower()


def format_score(score: float, decimal_places: int = 3) -> str:
    """
    점수를 포맷팅하는 함수

    Args:
        score (float): 포맷팅할 점수
        decimal_places (int): 소수점 자릿수

    Returns:
        str: 포맷팅된 점수 문자열
    """
    return f"{score:.{decimal_places}f}"


def format_elapsed(seconds: float) -> str:
    """경과 시간을 '1.2 s' 형태로 포맷팅"""
    return f"{seconds:.1f} s"


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    텍스트를 지정된 길이로 자르는 함수

    Args:
        text (str): 자를 텍스트
        max_length (int): 최대 길이
        suffix (str): 자른 후 추가할 접미사

    Returns:
        str: 잘린 텍스트
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix


def atomic_write_bytes(path: str, data: bytes) -> None:
    """
    임시 파일에 쓴 뒤 교체하는 방식으로 파일을 원자적으로 저장

    상위 디렉토리가 없으면 생성합니다. 쓰기 도중 실패하면 임시 파일을 지우고
    예외를 그대로 전달합니다.

    Args:
        path (str): 저장할 파일 경로
        data (bytes): 저장할 데이터
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise

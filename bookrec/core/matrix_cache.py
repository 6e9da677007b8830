"""
유사도 행렬 캐시 모듈
====================

유사도 행렬의 바이너리 저장/로드와 웜 스타트 여부 판단을 담당합니다.

파일 형식 (리틀 엔디언):
    [int32 n][float32 × n·n (행 우선)]
    전체 파일 크기는 정확히 4 + 4·n·n 바이트여야 합니다.

웜 스타트 규칙:
    TF-IDF 모델 파일과 행렬 파일이 모두 있을 때만 캐시를 사용합니다.
    하나만 있으면 둘 다 무시하고 처음부터 다시 계산합니다.

작성자: AI Assistant
버전: 1.0.0
"""

import os
from enum import Enum
from typing import Optional

import numpy as np

from .errors import CorruptCacheError
from .similarity_matrix import SimilarityMatrix
from ..utils.helpers import atomic_write_bytes

HEADER_DTYPE = np.dtype('<i4')
VALUE_DTYPE = np.dtype('<f4')
HEADER_SIZE = HEADER_DTYPE.itemsize


class CacheState(str, Enum):
    """캐시 파일 존재 상태"""
    MISSING = "missing"
    MODEL_ONLY = "model_only"
    MATRIX_ONLY = "matrix_only"
    BOTH = "both"

    @property
    def is_warm(self) -> bool:
        """캐시를 로드할 수 있는 상태인지 여부"""
        return self is CacheState.BOTH


def detect_cache_state(model_path: str, matrix_path: str) -> CacheState:
    """
    모델/행렬 파일 존재 여부로 캐시 상태를 결정

    Args:
        model_path (str): TF-IDF 모델 파일 경로
        matrix_path (str): 유사도 행렬 파일 경로

    Returns:
        CacheState: 캐시 상태
    """
    has_model = os.path.isfile(model_path)
    has_matrix = os.path.isfile(matrix_path)

    if has_model and has_matrix:
        return CacheState.BOTH
    if has_model:
        return CacheState.MODEL_ONLY
    if has_matrix:
        return CacheState.MATRIX_ONLY
    return CacheState.MISSING


def expected_file_size(n: int) -> int:
    """행렬 크기 n에 대한 캐시 파일 크기 (바이트)"""
    return HEADER_SIZE + VALUE_DTYPE.itemsize * n * n


def save_matrix(matrix: SimilarityMatrix, path: str) -> None:
    """
    유사도 행렬을 바이너리 파일로 저장

    Args:
        matrix (SimilarityMatrix): 저장할 행렬
        path (str): 저장할 파일 경로
    """
    header = np.array([matrix.size], dtype=HEADER_DTYPE).tobytes()
    body = matrix.data.astype(VALUE_DTYPE, copy=False).tobytes()
    atomic_write_bytes(path, header + body)


def load_matrix(path: str, expected_count: Optional[int] = None) -> SimilarityMatrix:
    """
    바이너리 파일에서 유사도 행렬을 로드

    Args:
        path (str): 행렬 파일 경로
        expected_count (Optional[int]): 현재 카탈로그의 도서 수 (주어지면 n과 비교)

    Returns:
        SimilarityMatrix: 로드된 행렬

    Raises:
        CorruptCacheError: 파일 크기가 맞지 않거나 도서 수와 불일치하는 경우
    """
    with open(path, 'rb') as f:
        raw = f.read()

    if len(raw) < HEADER_SIZE:
        raise CorruptCacheError(f"유사도 행렬 파일이 너무 짧습니다: {path} ({len(raw)} 바이트)")

    n = int(np.frombuffer(raw, dtype=HEADER_DTYPE, count=1)[0])
    if n < 0:
        raise CorruptCacheError(f"유사도 행렬 크기가 음수입니다: {n}")

    if len(raw) != expected_file_size(n):
        raise CorruptCacheError(
            f"유사도 행렬 파일 크기가 올바르지 않습니다: {len(raw)} 바이트 "
            f"(n={n}이면 {expected_file_size(n)} 바이트여야 함)"
        )

    if expected_count is not None and n != expected_count:
        raise CorruptCacheError(
            f"캐시된 행렬 크기({n})가 카탈로그 도서 수({expected_count})와 다릅니다."
        )

    if n == 0:
        return SimilarityMatrix(np.zeros(0, dtype=np.float32), 0)

    data = np.frombuffer(raw, dtype=VALUE_DTYPE, offset=HEADER_SIZE).astype(np.float32)
    return SimilarityMatrix(data, n)

"""
유사도 행렬 모듈
================

이 모듈은 도서 특성 벡터들로부터 n×n 코사인 유사도 행렬을 계산합니다.

주요 기능:
- 벡터 노름 사전 계산 (0 벡터 보호용 보정값 포함)
- 레인 단위 누적 내적 (SIMD 스타일)
- 행 단위 병렬 계산 (ThreadPoolExecutor)
- 평탄화된 행 우선(row-major) 버퍼 기반 행렬 표현

병렬 계산 규칙:
    행 i를 맡은 워커는 matrix[i][i:]와 matrix[i:][i]만 기록하고,
    벡터/노름 배열은 읽기만 합니다. 행들이 서로 겹치지 않게 나뉘므로
    잠금이 필요 없습니다.

작성자: AI Assistant
버전: 1.0.0
"""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Union

import numpy as np

from .config import MATRIX_WORKERS, NORM_EPSILON, SIMD_LANE_WIDTH
from .errors import DimensionMismatchError

VectorSet = Union[np.ndarray, Sequence[Sequence[float]]]

# 한 번에 내적을 계산할 최대 행 수
ROW_CHUNK = 256


class SimilarityMatrix:
    """
    n×n 대칭 유사도 행렬 (읽기 전용)

    내부적으로 길이 n²의 float32 평탄 버퍼에 (i * n + j) 위치로 저장합니다.
    """

    def __init__(self, data: np.ndarray, size: int):
        """
        Args:
            data (np.ndarray): 길이 size * size 의 float32 버퍼
            size (int): 행렬 크기 n
        """
        data = np.ascontiguousarray(data, dtype=np.float32).reshape(-1)
        if data.shape[0] != size * size:
            raise ValueError(f"버퍼 길이({data.shape[0]})가 {size}×{size}와 맞지 않습니다.")
        data.flags.writeable = False
        self._data = data
        self._size = size

    @property
    def size(self) -> int:
        """행렬 크기 n (도서 수)"""
        return self._size

    @property
    def data(self) -> np.ndarray:
        """평탄화된 행 우선 버퍼 (읽기 전용)"""
        return self._data

    def row(self, i: int) -> np.ndarray:
        """i번째 행 (읽기 전용 뷰)"""
        if not 0 <= i < self._size:
            raise IndexError(f"행 인덱스가 범위를 벗어났습니다: {i}")
        return self._data[i * self._size:(i + 1) * self._size]

    def as_array(self) -> np.ndarray:
        """(n, n) 모양의 읽기 전용 뷰"""
        return self._data.reshape(self._size, self._size)

    def __getitem__(self, key) -> float:
        i, j = key
        if not (0 <= i < self._size and 0 <= j < self._size):
            raise IndexError(f"행렬 인덱스가 범위를 벗어났습니다: ({i}, {j})")
        return float(self._data[i * self._size + j])

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"SimilarityMatrix(size={self._size})"


def _as_vector_array(vectors: VectorSet) -> np.ndarray:
    """
    벡터 집합을 (n, d) float32 배열로 변환

    Raises:
        DimensionMismatchError: 벡터 길이가 서로 다르거나 2차원이 아닌 경우
    """
    if isinstance(vectors, np.ndarray):
        if vectors.ndim != 2:
            if vectors.size == 0:
                return np.zeros((0, 0), dtype=np.float32)
            raise DimensionMismatchError(f"벡터 배열은 2차원이어야 합니다: shape={vectors.shape}")
        return np.ascontiguousarray(vectors, dtype=np.float32)

    rows = [np.asarray(v, dtype=np.float32).reshape(-1) for v in vectors]
    if not rows:
        return np.zeros((0, 0), dtype=np.float32)

    lengths = {row.shape[0] for row in rows}
    if len(lengths) != 1:
        raise DimensionMismatchError(f"특성 벡터 길이가 서로 다릅니다: {sorted(lengths)}")
    return np.ascontiguousarray(np.stack(rows), dtype=np.float32)


def compute_norms(vectors: np.ndarray, epsilon: float = NORM_EPSILON) -> np.ndarray:
    """
    각 벡터의 유클리드 노름 + epsilon 계산

    Args:
        vectors (np.ndarray): (n, d) 벡터 배열
        epsilon (float): 0 벡터 나눗셈 방지용 보정값

    Returns:
        np.ndarray: 길이 n의 float32 노름 배열
    """
    squared = np.einsum('ij,ij->i', vectors, vectors)
    return (np.sqrt(squared) + np.float32(epsilon)).astype(np.float32)


def lane_dot(block: np.ndarray, vector: np.ndarray, lane_width: int = SIMD_LANE_WIDTH) -> np.ndarray:
    """
    block의 각 행과 vector의 내적을 레인 단위 누적으로 계산

    앞의 (d // L) * L 개 원소는 L개의 부분합 레인에 누적한 뒤 합산하고,
    나머지 d % L 개 원소는 꼬리 계산으로 더합니다.

    Args:
        block (np.ndarray): (m, d) 배열
        vector (np.ndarray): 길이 d 벡터
        lane_width (int): 레인 폭 L

    Returns:
        np.ndarray: 길이 m의 내적 배열
    """
    if lane_width < 1:
        raise ValueError(f"lane_width는 1 이상이어야 합니다: {lane_width}")

    m, d = block.shape
    if vector.shape[0] != d:
        raise DimensionMismatchError(f"벡터 길이가 다릅니다: {d} != {vector.shape[0]}")

    wide = (d // lane_width) * lane_width
    if wide:
        lanes = (block[:, :wide] * vector[:wide]).reshape(m, wide // lane_width, lane_width)
        dots = lanes.sum(axis=1, dtype=np.float32).sum(axis=1, dtype=np.float32)
    else:
        dots = np.zeros(m, dtype=np.float32)

    # 꼬리
    if wide < d:
        dots = dots + block[:, wide:] @ vector[wide:]

    return dots.astype(np.float32, copy=False)


def simd_dot(a: Sequence[float], b: Sequence[float], lane_width: int = SIMD_LANE_WIDTH) -> float:
    """두 벡터의 내적 (레인 단위 누적)"""
    a = np.asarray(a, dtype=np.float32).reshape(-1)
    b = np.asarray(b, dtype=np.float32).reshape(-1)
    return float(lane_dot(a[np.newaxis, :], b, lane_width)[0])


def _row_scores(i: int, vectors: np.ndarray, norms: np.ndarray, lane_width: int) -> np.ndarray:
    """행 i의 j >= i 구간 유사도 (임시 메모리를 줄이기 위해 ROW_CHUNK 단위로 계산)"""
    n = vectors.shape[0]
    scores = np.empty(n - i, dtype=np.float32)
    for start in range(i, n, ROW_CHUNK):
        stop = min(start + ROW_CHUNK, n)
        dots = lane_dot(vectors[start:stop], vectors[i], lane_width)
        scores[start - i:stop - i] = dots / (norms[i] * norms[start:stop])
    return scores


def _fill_rows(rows: List[int], vectors: np.ndarray, norms: np.ndarray,
               out: np.ndarray, lane_width: int) -> None:
    """할당된 행들의 상삼각 부분을 계산하고 대칭 위치에도 기록"""
    n = vectors.shape[0]
    for i in rows:
        scores = _row_scores(i, vectors, norms, lane_width)
        out[i * n + i:(i + 1) * n] = scores
        out[i * n + i::n] = scores


def build_similarity_matrix(vectors: VectorSet,
                            max_workers: Optional[int] = None,
                            lane_width: int = SIMD_LANE_WIDTH,
                            epsilon: float = NORM_EPSILON) -> SimilarityMatrix:
    """
    코사인 유사도 행렬을 계산하는 함수

    i <= j 인 모든 쌍에 대해 한 번만 계산하고 (i, j), (j, i) 두 칸에 같은 값을
    기록하므로 결과는 정확히 대칭입니다.

    Args:
        vectors: (n, d) 벡터 집합 (모든 벡터의 길이가 같아야 함)
        max_workers (Optional[int]): 병렬 워커 수 (기본값: 설정의 MATRIX_WORKERS)
        lane_width (int): 내적 누적 레인 폭
        epsilon (float): 노름 보정값

    Returns:
        SimilarityMatrix: n×n 유사도 행렬

    Raises:
        DimensionMismatchError: 벡터 길이가 서로 다른 경우
    """
    v = _as_vector_array(vectors)
    n = v.shape[0]
    out = np.zeros(n * n, dtype=np.float32)
    if n == 0:
        return SimilarityMatrix(out, 0)

    norms = compute_norms(v, epsilon)

    workers = max(1, min(max_workers or MATRIX_WORKERS, n))
    # 행 i의 비용은 (n - i)에 비례하므로 줄무늬(stripe) 방식으로 분배
    stripes = [list(range(w, n, workers)) for w in range(workers)]

    start = time.perf_counter()
    if workers == 1:
        _fill_rows(stripes[0], v, norms, out, lane_width)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(_fill_rows, rows, v, norms, out, lane_width) for rows in stripes]
            for future in futures:
                future.result()

    elapsed = time.perf_counter() - start
    print(f"✅ 유사도 행렬 계산 완료: {n}×{n} (차원 {v.shape[1]}, 워커 {workers}개, {elapsed:.2f}초)")
    return SimilarityMatrix(out, n)

"""
도서 추천 모듈
==============

이 모듈은 도서 추천 엔진의 생성(웜/콜드 스타트)과 추천 질의 처리를 담당합니다.

주요 기능:
- CSV 로드 → TF-IDF 벡터화 → 유사도 행렬 계산/로드 → 캐시 저장
- 제목 해석 (정확 일치 → 퍼지 매칭)
- 유사도 기준 상위 K개 추천

생성 이후에는 카탈로그, 벡터, 유사도 행렬이 변경되지 않으므로
여러 호출자가 동시에 recommend를 호출해도 잠금이 필요 없습니다.

작성자: AI Assistant
버전: 1.0.0
"""

import os
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .config import (
    BOOK_DATA_PATH,
    CACHE_DIR,
    DEFAULT_TOP_K,
    MATRIX_WORKERS,
    get_model_path,
    get_matrix_path
)
from .data_loader import BookCatalog, load_book_records
from .matrix_cache import CacheState, detect_cache_state, load_matrix, save_matrix
from .models import BookRecord
from .similarity_matrix import SimilarityMatrix, build_similarity_matrix
from .title_matcher import RapidFuzzTitleMatcher, TitleMatcher
from .vectorizer import TfidfBookVectorizer


class QueryResolver:
    """
    제목 질의를 카탈로그 인덱스로 해석하고 추천 순위를 매기는 클래스
    """

    def __init__(self, catalog: BookCatalog, matrix: SimilarityMatrix,
                 matcher: Optional[TitleMatcher] = None):
        """
        Args:
            catalog: 도서 카탈로그
            matrix: 카탈로그와 인덱스가 정렬된 유사도 행렬
            matcher: 퍼지 제목 매처 (기본값: RapidFuzzTitleMatcher)
        """
        if matrix.size != catalog.item_count():
            raise ValueError(
                f"유사도 행렬 크기({matrix.size})와 도서 수({catalog.item_count()})가 다릅니다."
            )
        self.catalog = catalog
        self.matrix = matrix
        self.matcher = matcher or RapidFuzzTitleMatcher()

    def resolve(self, query_title: str) -> Optional[int]:
        """
        제목을 도서 인덱스로 해석

        정확히 일치(대소문자 무시)하는 제목이 없으면 퍼지 매칭으로 가장 비슷한
        제목을 찾습니다.

        Returns:
            Optional[int]: 도서 인덱스, 매칭이 없으면 None
        """
        if not query_title or not query_title.strip():
            return None

        idx = self.catalog.index_for_title(query_title)
        if idx is not None:
            return idx

        best = self.matcher.best_match(query_title, self.catalog.indexed_titles())
        if best is None:
            return None
        return self.catalog.index_for_title(best)

    def rank(self, idx: int, top_k: int) -> List[Tuple[str, float]]:
        """
        idx 도서와 유사한 도서를 점수 내림차순으로 반환

        동점이면 카탈로그 순서를 유지하며 (안정 정렬), idx 도서 자신은 제외합니다.
        """
        if top_k <= 0:
            return []

        row = self.matrix.row(idx)
        order = np.argsort(-row, kind='stable')
        order = order[order != idx][:top_k]

        return [(self.catalog.item_at(int(i)).title, float(row[i])) for i in order]

    def recommend(self, query_title: str, top_k: int = DEFAULT_TOP_K) -> List[Tuple[str, float]]:
        """
        제목과 유사한 도서 추천

        Args:
            query_title (str): 질의 제목
            top_k (int): 최대 추천 개수

        Returns:
            List[Tuple[str, float]]: (제목, 유사도) 리스트, 매칭이 없으면 빈 리스트
        """
        idx = self.resolve(query_title)
        if idx is None:
            return []
        return self.rank(idx, top_k)


class RecommendationEngine:
    """
    도서 추천 엔진

    생성 시점에 데이터 로드, 벡터화, 유사도 행렬 계산(또는 캐시 로드)을 모두
    마치며, 이후에는 읽기 전용 질의만 처리합니다.
    """

    def __init__(self,
                 csv_path: str = BOOK_DATA_PATH,
                 records: Optional[Iterable[BookRecord]] = None,
                 cache_dir: str = CACHE_DIR,
                 vectorizer: Optional[TfidfBookVectorizer] = None,
                 matcher: Optional[TitleMatcher] = None,
                 max_workers: int = MATRIX_WORKERS):
        """
        추천 엔진 초기화

        Args:
            csv_path (str): 도서 CSV 파일 경로 (records가 주어지면 무시)
            records: 이미 로드된 도서 레코드 (선택)
            cache_dir (str): 모델/행렬 캐시 디렉토리
            vectorizer: 벡터화 어댑터 (기본값: TfidfBookVectorizer)
            matcher: 퍼지 제목 매처
            max_workers (int): 유사도 행렬 계산 워커 수

        Raises:
            IngestionError: 데이터 로드 실패
            VectorizerError: 모델 학습/변환 실패
            CorruptCacheError: 캐시 파일 손상 또는 카탈로그 불일치
            DimensionMismatchError: 벡터 길이 불일치
        """
        self.model_path = get_model_path(cache_dir)
        self.matrix_path = get_matrix_path(cache_dir)
        self.vectorizer = vectorizer or TfidfBookVectorizer()
        self.max_workers = max_workers

        # 0. CSV → 도서 레코드
        if records is None:
            records = load_book_records(csv_path)
        self.catalog = BookCatalog(records)
        print(f"✅ 총 {self.catalog.item_count()}권의 도서 데이터를 로드했습니다.")

        # 1. 캐시 상태 결정 (한 번만)
        self.cache_state = detect_cache_state(self.model_path, self.matrix_path)

        if self.catalog.item_count() == 0:
            print("⚠️ 카탈로그가 비어 있어 벡터화와 캐시를 건너뜁니다.")
            self.vectors = np.zeros((0, 0), dtype=np.float32)
            self.similarity_matrix = build_similarity_matrix(self.vectors)
        elif self.cache_state.is_warm:
            self._warm_start()
        else:
            self._cold_start()

        self.resolver = QueryResolver(self.catalog, self.similarity_matrix, matcher)

    @property
    def warm_start(self) -> bool:
        """캐시에서 로드했는지 여부"""
        return self.cache_state.is_warm and self.catalog.item_count() > 0

    def _warm_start(self):
        """저장된 모델과 행렬을 로드합니다."""
        books = self.catalog.get_all_books()
        model = self.vectorizer.load(self.model_path)
        self.vectors = self.vectorizer.transform(model, books)
        self.similarity_matrix = load_matrix(self.matrix_path, expected_count=len(books))
        print(f"✅ 캐시를 로드했습니다: {self.model_path}, {self.matrix_path}")

    def _cold_start(self):
        """모델을 학습하고 행렬을 계산한 뒤 캐시에 저장합니다."""
        if self.cache_state in (CacheState.MODEL_ONLY, CacheState.MATRIX_ONLY):
            print(f"⚠️ 캐시 파일이 일부만 존재합니다 ({self.cache_state.value}). 처음부터 다시 계산합니다.")
        else:
            print("🔄 캐시가 없습니다. TF-IDF 모델과 유사도 행렬을 새로 만듭니다...")

        books = self.catalog.get_all_books()
        model, self.vectors = self.vectorizer.fit(books)
        print(f"✅ TF-IDF 모델 학습 완료: 어휘 {self.vectors.shape[1]}개")

        self.similarity_matrix = build_similarity_matrix(self.vectors, max_workers=self.max_workers)

        self.vectorizer.save(model, self.model_path)
        save_matrix(self.similarity_matrix, self.matrix_path)
        print(f"✅ 캐시를 저장했습니다: {os.path.dirname(os.path.abspath(self.matrix_path))}")

    def item_count(self) -> int:
        """카탈로그의 도서 수 반환"""
        return self.catalog.item_count()

    def recommend(self, title: str, top_k: int = DEFAULT_TOP_K) -> List[Tuple[str, float]]:
        """
        제목과 유사한 도서 추천

        Args:
            title (str): 질의 제목 (오타나 어순 차이는 퍼지 매칭으로 보정)
            top_k (int): 최대 추천 개수

        Returns:
            List[Tuple[str, float]]: (제목, 유사도) 리스트
        """
        return self.resolver.recommend(title, top_k)


def clear_cache(cache_dir: str = CACHE_DIR) -> List[str]:
    """
    캐시 파일(모델, 행렬)을 삭제합니다.

    Returns:
        List[str]: 삭제된 파일 경로 목록
    """
    removed = []
    for path in (get_model_path(cache_dir), get_matrix_path(cache_dir)):
        if os.path.exists(path):
            os.remove(path)
            removed.append(path)
    return removed


"""
TF-IDF 벡터화 모듈
==================

도서의 결합 텍스트를 고정 길이 실수 벡터로 변환하는 어댑터입니다.
scikit-learn의 TfidfVectorizer를 사용하며, 학습된 모델은 pickle로 저장합니다.

주요 기능:
- 모델 학습 및 벡터 생성 (fit)
- 저장된 모델 로드 (load)
- 모델을 이용한 벡터 변환 (transform)
- 모델 저장 (save)

작성자: AI Assistant
버전: 1.0.0
"""

import pickle
from typing import Sequence, Tuple

import numpy as np
from sklearn.exceptions import NotFittedError
from sklearn.feature_extraction.text import TfidfVectorizer

from .errors import CorruptCacheError, VectorizerError
from .models import BookRecord
from ..utils.helpers import atomic_write_bytes


class TfidfBookVectorizer:
    """
    TfidfVectorizer 기반 벡터화 어댑터

    반환되는 벡터는 입력 도서 순서와 1:1로 대응하는 (n, d) float32 배열이며,
    모든 벡터의 길이 d는 모델의 어휘 크기로 동일합니다.
    """

    def __init__(self, **tfidf_params):
        """
        Args:
            **tfidf_params: TfidfVectorizer에 그대로 전달할 파라미터
        """
        self.tfidf_params = tfidf_params

    def fit(self, books: Sequence[BookRecord]) -> Tuple[TfidfVectorizer, np.ndarray]:
        """
        도서 목록으로 모델을 학습하고 벡터를 생성합니다.

        Returns:
            Tuple[TfidfVectorizer, np.ndarray]: 학습된 모델과 (n, d) 벡터 배열

        Raises:
            VectorizerError: 학습에 실패한 경우 (예: 어휘가 비어있음)
        """
        model = TfidfVectorizer(**self.tfidf_params)
        try:
            model.fit([book.combined for book in books])
        except ValueError as e:
            raise VectorizerError(f"TF-IDF 모델 학습 실패: {e}") from e
        return model, self.transform(model, books)

    def transform(self, model: TfidfVectorizer, books: Sequence[BookRecord]) -> np.ndarray:
        """
        학습된 모델로 도서 목록을 벡터로 변환합니다.

        Raises:
            VectorizerError: 모델이 학습되지 않았거나 변환에 실패한 경우
        """
        try:
            sparse = model.transform([book.combined for book in books])
        except (NotFittedError, ValueError, AttributeError) as e:
            raise VectorizerError(f"TF-IDF 변환 실패: {e}") from e

        vectors = np.asarray(sparse.toarray(), dtype=np.float32)
        if vectors.shape[0] != len(books):
            raise VectorizerError(
                f"벡터 수({vectors.shape[0]})와 도서 수({len(books)})가 일치하지 않습니다."
            )
        return vectors

    def save(self, model: TfidfVectorizer, path: str) -> None:
        """학습된 모델을 파일로 저장합니다."""
        atomic_write_bytes(path, pickle.dumps(model))

    def load(self, path: str) -> TfidfVectorizer:
        """
        저장된 모델을 로드합니다.

        Raises:
            CorruptCacheError: 파일을 읽을 수 없거나 TfidfVectorizer가 아닌 경우
        """
        try:
            with open(path, 'rb') as f:
                model = pickle.load(f)
        except Exception as e:
            # 손상된 바이트는 UnpicklingError 외의 오류도 낼 수 있음
            raise CorruptCacheError(f"TF-IDF 모델 파일이 손상되었습니다: {path} ({e})") from e

        if not isinstance(model, TfidfVectorizer):
            raise CorruptCacheError(
                f"TF-IDF 모델 파일에 예상하지 않은 객체가 있습니다: {type(model).__name__}"
            )
        return model

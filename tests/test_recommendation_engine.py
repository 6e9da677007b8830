"""
추천 엔진 테스트 모듈
====================

이 모듈은 RecommendationEngine 클래스의 생성(웜/콜드 스타트)과 추천 기능을
실제 CSV, TF-IDF, 캐시 파일로 테스트합니다.

테스트 항목:
- 콜드 스타트 시 캐시 파일 생성
- 웜 스타트 시 캐시 로드 및 동일한 결과
- 캐시 일부만 있을 때 재계산
- 카탈로그 변경 / 손상된 캐시 감지
- 빈 카탈로그
- 캐시 삭제

작성자: AI Assistant
버전: 1.0.0
"""

import unittest
import sys
import os
import tempfile

# 상위 디렉토리를 Python 경로에 추가
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bookrec.core.config import get_model_path, get_matrix_path
from bookrec.core.errors import CorruptCacheError, IngestionError, VectorizerError
from bookrec.core.matrix_cache import CacheState
from bookrec.core.models import BookRecord
from bookrec.core.recommender import RecommendationEngine, clear_cache

BOOKS_CSV = (
    "isbn13,isbn10,title,subtitle,authors,categories,thumbnail,description,published_year\n"
    "1,1,Dune,,Frank Herbert,Fiction,,,1965\n"
    "2,2,Dune Messiah,,Frank Herbert,Fiction,,,1969\n"
    "3,3,Foundation,,Isaac Asimov,Science Fiction,,,1951\n"
    "4,4,Children of Dune,,Frank Herbert,Fiction,,,1976\n"
    "5,5,\"I, Robot\",,Isaac Asimov,Science Fiction,,,1950\n"
)


class TestRecommendationEngine(unittest.TestCase):
    """
    RecommendationEngine 클래스의 테스트 케이스
    """

    def setUp(self):
        """
        테스트 설정 메서드
        임시 디렉토리에 CSV 파일을 만들고 캐시 디렉토리를 지정합니다.
        """
        self._tmp = tempfile.TemporaryDirectory()
        self.csv_path = os.path.join(self._tmp.name, "data.csv")
        self.cache_dir = os.path.join(self._tmp.name, "cache")
        with open(self.csv_path, 'w', encoding='utf-8') as f:
            f.write(BOOKS_CSV)

    def tearDown(self):
        self._tmp.cleanup()

    def _engine(self, **kwargs):
        kwargs.setdefault('csv_path', self.csv_path)
        return RecommendationEngine(cache_dir=self.cache_dir, max_workers=2, **kwargs)

    def test_cold_start_creates_cache(self):
        """
        처음 생성할 때 모델/행렬 캐시가 저장되는지 테스트
        """
        engine = self._engine()

        self.assertEqual(engine.cache_state, CacheState.MISSING)
        self.assertFalse(engine.warm_start)
        self.assertEqual(engine.item_count(), 5)
        self.assertTrue(os.path.exists(get_model_path(self.cache_dir)))
        self.assertTrue(os.path.exists(get_matrix_path(self.cache_dir)))
        self.assertEqual(os.path.getsize(get_matrix_path(self.cache_dir)), 4 + 4 * 5 * 5)

    def test_recommend_similar_author(self):
        """
        같은 저자의 도서가 먼저 추천되는지 테스트
        """
        engine = self._engine()

        recs = engine.recommend("Dune", 2)
        self.assertEqual({title for title, _ in recs}, {"Dune Messiah", "Children of Dune"})

        recs = engine.recommend("Foundation", 1)
        self.assertEqual(recs[0][0], "I, Robot")

    def test_recommend_properties(self):
        """
        추천 결과가 내림차순이고 질의 도서를 포함하지 않는지 테스트
        """
        engine = self._engine()

        recs = engine.recommend("children of dune", 10)
        self.assertEqual(len(recs), 4)
        scores = [score for _, score in recs]
        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertNotIn("Children of Dune", [title for title, _ in recs])

    def test_fuzzy_query(self):
        """
        오타가 있는 질의도 추천되는지 테스트
        """
        engine = self._engine()

        self.assertEqual(engine.recommend("Dune Mesiah", 3), engine.recommend("Dune Messiah", 3))
        self.assertEqual(engine.recommend("zxqv wpty", 3), [])

    def test_warm_start_loads_cache(self):
        """
        두 번째 생성 시 캐시를 로드하고 같은 결과를 내는지 테스트
        """
        cold = self._engine()
        warm = self._engine()

        self.assertEqual(warm.cache_state, CacheState.BOTH)
        self.assertTrue(warm.warm_start)
        self.assertEqual(warm.similarity_matrix.data.tobytes(), cold.similarity_matrix.data.tobytes())
        self.assertEqual(warm.vectors.shape, cold.vectors.shape)
        self.assertEqual(warm.recommend("Dune", 3), cold.recommend("Dune", 3))

    def test_partial_cache_rebuilds(self):
        """
        캐시 파일이 하나만 있으면 둘 다 다시 만드는지 테스트
        """
        self._engine()
        os.remove(get_matrix_path(self.cache_dir))

        engine = self._engine()
        self.assertEqual(engine.cache_state, CacheState.MODEL_ONLY)
        self.assertFalse(engine.warm_start)
        self.assertTrue(os.path.exists(get_matrix_path(self.cache_dir)))

        os.remove(get_model_path(self.cache_dir))
        engine = self._engine()
        self.assertEqual(engine.cache_state, CacheState.MATRIX_ONLY)
        self.assertFalse(engine.warm_start)
        self.assertTrue(os.path.exists(get_model_path(self.cache_dir)))

    def test_catalog_change_detected(self):
        """
        캐시 이후 카탈로그 도서 수가 바뀌면 CorruptCacheError가 발생하는지 테스트
        """
        self._engine()
        with open(self.csv_path, 'a', encoding='utf-8') as f:
            f.write("6,6,Hyperion,,Dan Simmons,Fiction,,,1989\n")

        with self.assertRaises(CorruptCacheError):
            self._engine()

    def test_corrupt_matrix_file(self):
        """
        행렬 파일이 잘린 경우 CorruptCacheError가 발생하는지 테스트
        """
        self._engine()
        matrix_path = get_matrix_path(self.cache_dir)
        with open(matrix_path, 'rb') as f:
            raw = f.read()
        with open(matrix_path, 'wb') as f:
            f.write(raw[:10])

        with self.assertRaises(CorruptCacheError):
            self._engine()

    def test_corrupt_model_file(self):
        """
        모델 파일이 손상된 경우 CorruptCacheError가 발생하는지 테스트
        """
        self._engine()
        with open(get_model_path(self.cache_dir), 'wb') as f:
            f.write(b'\x00garbage')

        with self.assertRaises(CorruptCacheError):
            self._engine()

    def test_records_instead_of_csv(self):
        """
        이미 로드된 레코드로 엔진을 만드는 기능 테스트
        """
        records = [BookRecord(title="Dune", authors="Frank Herbert"),
                   BookRecord(title="Dune Messiah", authors="Frank Herbert"),
                   BookRecord(title="Foundation", authors="Isaac Asimov")]
        engine = self._engine(csv_path=None, records=records)

        self.assertEqual([t for t, _ in engine.recommend("Dune", 2)], ["Dune Messiah", "Foundation"])

    def test_empty_catalog(self):
        """
        빈 카탈로그는 0×0 행렬을 만들고 빈 결과를 반환하는지 테스트
        """
        engine = self._engine(csv_path=None, records=[])

        self.assertEqual(engine.item_count(), 0)
        self.assertEqual(engine.similarity_matrix.size, 0)
        self.assertEqual(engine.recommend("Dune", 10), [])
        self.assertFalse(os.path.exists(get_matrix_path(self.cache_dir)))

    def test_missing_csv(self):
        """
        CSV 파일이 없으면 IngestionError가 발생하는지 테스트
        """
        with self.assertRaises(IngestionError):
            self._engine(csv_path=os.path.join(self._tmp.name, "missing.csv"))

    def test_vectorizer_failure_propagates(self):
        """
        TF-IDF 학습 실패가 생성 오류로 전달되는지 테스트
        """
        with self.assertRaises(VectorizerError):
            self._engine(csv_path=None, records=[BookRecord(title="x")])

    def test_clear_cache(self):
        """
        캐시 삭제 기능 테스트
        """
        self._engine()

        removed = clear_cache(self.cache_dir)
        self.assertEqual(len(removed), 2)
        self.assertEqual(clear_cache(self.cache_dir), [])
        self.assertEqual(self._engine().cache_state, CacheState.MISSING)


if __name__ == '__main__':
    # 테스트 실행
    unittest.main()

"""
예외 정의 모듈
==============

도서 추천 엔진에서 사용하는 예외 클래스들을 정의합니다.
엔진 생성 단계의 오류는 모두 BookRecommenderError를 상속하며,
검색 결과 없음(NoMatch)은 예외가 아니라 빈 결과 리스트로 표현합니다.

작성자: AI Assistant
버전: 1.0.0
"""


class BookRecommenderError(RuntimeError):
    """도서 추천 엔진 예외의 기본 클래스"""


class IngestionError(BookRecommenderError):
    """CSV 데이터 로드 실패"""


class VectorizerError(BookRecommenderError):
    """TF-IDF 모델 학습/변환 실패"""


class CorruptCacheError(BookRecommenderError):
    """캐시 파일(모델 또는 유사도 행렬)이 손상되었거나 카탈로그와 불일치"""


class DimensionMismatchError(BookRecommenderError, ValueError):
    """특성 벡터의 길이가 서로 다름"""

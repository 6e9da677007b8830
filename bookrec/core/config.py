"""
설정 관리 모듈
==============

이 모듈은 도서 추천 엔진의 모든 설정을 중앙에서 관리합니다.
환경 변수, 캐시 경로, 상수값 등을 정의하고 관리합니다.

주요 기능:
- 환경 변수 로드 및 관리
- 데이터/캐시 경로 설정
- 유사도 계산 및 검색 상수 정의

작성자: AI Assistant
버전: 1.0.0
"""

import os
from dotenv import load_dotenv

# 환경 변수 로드 (.env 파일에서 설정값 읽기)
load_dotenv()

# =============================================================================
# 데이터 경로 설정
# =============================================================================

# 도서 카탈로그 CSV 파일 경로
BOOK_DATA_PATH = os.getenv("BOOK_DATA_PATH", "./data/data.csv")

# CSV 컬럼명 (제목은 필수, 나머지는 없으면 빈 문자열로 처리)
TITLE_COLUMN = os.getenv("TITLE_COLUMN", "title")
AUTHORS_COLUMN = os.getenv("AUTHORS_COLUMN", "authors")
CATEGORIES_COLUMN = os.getenv("CATEGORIES_COLUMN", "categories")
PUBLISHED_YEAR_COLUMN = os.getenv("PUBLISHED_YEAR_COLUMN", "published_year")

# =============================================================================
# 캐시 설정
# =============================================================================

# 캐시 디렉토리 (TF-IDF 모델과 유사도 행렬을 저장)
CACHE_DIR = os.getenv("CACHE_DIR", "./cache")

# 캐시 파일명
MODEL_FILENAME = os.getenv("MODEL_FILENAME", "tfidf.pkl")
MATRIX_FILENAME = os.getenv("MATRIX_FILENAME", "similarity.bin")

# =============================================================================
# 유사도 행렬 설정
# =============================================================================

# 행 계산 병렬 워커 수 (기본값: CPU 코어 수)
MATRIX_WORKERS = int(os.getenv("MATRIX_WORKERS", str(os.cpu_count() or 1)))

# 내적 누적 레인 폭
SIMD_LANE_WIDTH = int(os.getenv("SIMD_LANE_WIDTH", "8"))

# 0 벡터 나눗셈 방지용 노름 보정값
NORM_EPSILON = float(os.getenv("NORM_EPSILON", "1e-10"))

# =============================================================================
# 검색 설정
# =============================================================================

# 기본 추천 개수
DEFAULT_TOP_K = int(os.getenv("DEFAULT_TOP_K", "10"))

# 퍼지 매칭 최소 점수 (0 ~ 100, 이 값 미만이면 매칭 없음)
FUZZY_SCORE_CUTOFF = float(os.getenv("FUZZY_SCORE_CUTOFF", "60"))

# =============================================================================
# 유틸리티 함수
# =============================================================================

def get_model_path(cache_dir: str = CACHE_DIR) -> str:
    """TF-IDF 모델 캐시 파일 경로 반환"""
    return os.path.join(cache_dir, MODEL_FILENAME)


def get_matrix_path(cache_dir: str = CACHE_DIR) -> str:
    """유사도 행렬 캐시 파일 경로 반환"""
    return os.path.join(cache_dir, MATRIX_FILENAME)

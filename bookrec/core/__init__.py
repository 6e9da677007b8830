"""
핵심 로직 패키지
===============

이 패키지는 도서 추천 엔진의 핵심 로직을 포함합니다.

모듈 목록:
- config: 설정 관리
- errors: 예외 정의
- models: 도서 레코드 모델
- data_loader: CSV 로드 및 도서 카탈로그
- vectorizer: TF-IDF 벡터화 어댑터
- similarity_matrix: 코사인 유사도 행렬 계산
- matrix_cache: 유사도 행렬 캐시 및 웜 스타트 판단
- title_matcher: 제목 퍼지 매칭
- recommender: 추천 엔진 및 질의 처리

작성자: AI Assistant
버전: 1.0.0
"""

from .recommender import RecommendationEngine, QueryResolver

__all__ = ['RecommendationEngine', 'QueryResolver']

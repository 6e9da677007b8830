"""
도서 추천기 패키지
=================

도서 카탈로그의 텍스트 정보로 TF-IDF 벡터와 코사인 유사도 행렬을 만들고,
제목과 비슷한 도서를 추천합니다.

하위 패키지:
- core: 설정, 데이터 로드, 벡터화, 유사도 행렬, 캐시, 추천 로직
- ui: 대화형 콘솔
- utils: 도우미 함수

작성자: AI Assistant
버전: 1.0.0
"""

__version__ = "1.0.0"

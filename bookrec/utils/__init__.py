"""
유틸리티 패키지
==============

모듈 목록:
- helpers: 문자열/포맷팅/파일 도우미 함수

작성자: AI Assistant
버전: 1.0.0
"""

"""
사용자 인터페이스 패키지
=======================

모듈 목록:
- console: 대화형 콘솔

작성자: AI Assistant
버전: 1.0.0
"""

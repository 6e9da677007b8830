"""
데이터 모델 모듈
================

카탈로그의 도서 한 권을 표현하는 불변 모델을 정의합니다.

작성자: AI Assistant
버전: 1.0.0
"""

from typing import Any
from pydantic import BaseModel, ConfigDict, field_validator

from ..utils.helpers import clean_text


class BookRecord(BaseModel):
    """도서 레코드 (생성 후 변경 불가)"""
    model_config = ConfigDict(frozen=True)

    title: str
    authors: str = ""
    categories: str = ""
    published_year: str = ""

    @field_validator('title', 'authors', 'categories', 'published_year', mode='before')
    @classmethod
    def normalize_whitespace(cls, v: Any) -> str:
        """결측값은 빈 문자열로, 공백은 하나로 정리"""
        if v is None:
            return ""
        return clean_text(str(v))

    @field_validator('title')
    @classmethod
    def validate_title_not_empty(cls, v: str) -> str:
        """제목이 비어있지 않은지 검증"""
        if not v:
            raise ValueError('도서 제목은 비어있을 수 없습니다.')
        return v

    @property
    def combined(self) -> str:
        """TF-IDF 입력으로 사용할 결합 텍스트"""
        return f"{self.title} {self.authors} {self.categories} {self.published_year}"

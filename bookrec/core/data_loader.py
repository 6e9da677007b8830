"""
도서 데이터 로더 모듈
====================

이 모듈은 CSV 형태의 도서 카탈로그를 로드하고, 위치 기반 인덱스와
제목 인덱스를 제공하는 도서 저장소(BookCatalog)를 정의합니다.

주요 기능:
- CSV 데이터 로드 및 레코드 변환
- 인덱스 기반 도서 조회
- 대소문자 무시 제목 → 인덱스 조회
- 카탈로그 통계 정보 제공

제목 인덱스 규칙:
    같은 제목(대소문자 무시)이 여러 번 나오면 나중에 나온 도서가 인덱스를
    차지합니다. 앞선 도서도 인덱스로는 계속 조회할 수 있지만, 제목으로는
    마지막 도서만 조회됩니다. 제목이 유일하다고 가정하면 안 됩니다.

작성자: AI Assistant
버전: 1.0.0
"""

from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
from pydantic import ValidationError

from .config import (
    BOOK_DATA_PATH,
    TITLE_COLUMN,
    AUTHORS_COLUMN,
    CATEGORIES_COLUMN,
    PUBLISHED_YEAR_COLUMN
)
from .errors import IngestionError
from .models import BookRecord
from ..utils.helpers import normalize_title


def load_book_records(csv_path: str = BOOK_DATA_PATH,
                      title_column: str = TITLE_COLUMN,
                      authors_column: str = AUTHORS_COLUMN,
                      categories_column: str = CATEGORIES_COLUMN,
                      published_year_column: str = PUBLISHED_YEAR_COLUMN) -> List[BookRecord]:
    """
    CSV 파일에서 도서 레코드를 로드하는 함수

    헤더가 있는 CSV를 읽으며, 따옴표로 감싼 필드 안의 쉼표는 그대로 유지됩니다.
    제목 외의 컬럼이 없으면 빈 문자열로 채웁니다.

    Args:
        csv_path (str): CSV 파일 경로
        title_column (str): 제목 컬럼명
        authors_column (str): 저자 컬럼명
        categories_column (str): 분류 컬럼명
        published_year_column (str): 출판연도 컬럼명

    Returns:
        List[BookRecord]: 파일 순서대로 정렬된 도서 레코드 리스트

    Raises:
        IngestionError: 파일을 읽을 수 없거나 데이터가 올바르지 않은 경우
    """
    try:
        df = pd.read_csv(csv_path, dtype=str, keep_default_na=False, skipinitialspace=True)
    except FileNotFoundError as e:
        raise IngestionError(f"도서 데이터 파일을 찾을 수 없습니다: {csv_path}") from e
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
        raise IngestionError(f"CSV 파일 형식이 올바르지 않습니다: {e}") from e

    if title_column not in df.columns:
        raise IngestionError(f"제목 컬럼을 찾을 수 없습니다: '{title_column}'")

    field_columns = {
        'title': title_column,
        'authors': authors_column,
        'categories': categories_column,
        'published_year': published_year_column
    }

    records = []
    for row_number, row in enumerate(df.to_dict(orient='records'), start=1):
        fields = {field: row.get(column, "") for field, column in field_columns.items()}
        try:
            records.append(BookRecord(**fields))
        except ValidationError as e:
            raise IngestionError(f"{row_number}번째 행의 데이터가 올바르지 않습니다: {e}") from e

    return records


class BookCatalog:
    """
    도서 카탈로그를 보관하고 조회하는 클래스

    도서의 식별자는 로드된 순서의 위치(인덱스)이며, 로드 이후에는 바뀌지 않습니다.
    """

    def __init__(self, records: Iterable[BookRecord]):
        """
        카탈로그 초기화

        레코드를 한 번 순회하면서 제목 인덱스를 만듭니다 (중복 제거 없음).

        Args:
            records: 로드된 순서의 도서 레코드들
        """
        self._books: List[BookRecord] = list(records)
        self._title_index: Dict[str, int] = {}

        for index, book in enumerate(self._books):
            self._title_index[normalize_title(book.title)] = index

    def item_count(self) -> int:
        """카탈로그의 도서 수 반환"""
        return len(self._books)

    def __len__(self) -> int:
        return len(self._books)

    def item_at(self, index: int) -> BookRecord:
        """
        인덱스 위치의 도서 반환

        Args:
            index (int): 도서 인덱스

        Returns:
            BookRecord: 해당 도서

        Raises:
            IndexError: 인덱스가 범위를 벗어난 경우
        """
        if not 0 <= index < len(self._books):
            raise IndexError(f"도서 인덱스가 범위를 벗어났습니다: {index}")
        return self._books[index]

    def index_for_title(self, title: str) -> Optional[int]:
        """
        제목으로 도서 인덱스 조회 (대소문자 무시, 정확히 일치하는 경우만)

        Args:
            title (str): 조회할 제목

        Returns:
            Optional[int]: 도서 인덱스, 없으면 None
        """
        return self._title_index.get(normalize_title(title))

    def indexed_titles(self) -> List[str]:
        """제목 인덱스에 등록된 (정규화된) 제목 목록 반환"""
        return list(self._title_index.keys())

    def titles(self) -> List[str]:
        """카탈로그 순서대로 원본 제목 목록 반환"""
        return [book.title for book in self._books]

    def get_all_books(self) -> List[BookRecord]:
        """모든 도서 레코드 반환 (복사본)"""
        return list(self._books)

    def get_catalog_statistics(self) -> Dict[str, Any]:
        """
        카탈로그 전체 통계 정보를 반환하는 메서드

        Returns:
            Dict[str, Any]: 도서 수, 고유 제목/저자 수, 분류/연도 분포
        """
        authors = [book.authors for book in self._books if book.authors]
        categories = [book.categories for book in self._books if book.categories]
        years = [book.published_year for book in self._books if book.published_year]

        return {
            'book_count': len(self._books),
            'unique_title_count': len(self._title_index),
            'unique_author_count': len(set(authors)),
            'category_distribution': pd.Series(categories, dtype=str).value_counts().to_dict(),
            'year_distribution': pd.Series(years, dtype=str).value_counts().to_dict()
        }

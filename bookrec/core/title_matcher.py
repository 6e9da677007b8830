"""
제목 퍼지 매칭 모듈
==================

정확히 일치하는 제목이 없을 때 가장 비슷한 제목을 찾는 매처를 정의합니다.
매처는 "후보 중 가장 잘 맞는 제목, 없으면 None" 하나의 동작만 가지므로
다른 구현으로 쉽게 교체할 수 있습니다.

작성자: AI Assistant
버전: 1.0.0
"""

from typing import Optional, Protocol, Sequence

from rapidfuzz import fuzz, process, utils

from .config import FUZZY_SCORE_CUTOFF


class TitleMatcher(Protocol):
    def best_match(self, query: str, candidates: Sequence[str]) -> Optional[str]: ...


class RapidFuzzTitleMatcher:
    """
    rapidfuzz 기반 제목 매처

    WRatio 점수(토큰 순서/부분 일치/오타에 관대, 대소문자 무시)로 가장 높은
    후보를 고르며, score_cutoff 미만이면 None을 반환합니다.
    """

    def __init__(self, score_cutoff: float = FUZZY_SCORE_CUTOFF):
        self.score_cutoff = score_cutoff

    def best_match(self, query: str, candidates: Sequence[str]) -> Optional[str]:
        if not query or not candidates:
            return None

        result = process.extractOne(
            query,
            candidates,
            scorer=fuzz.WRatio,
            processor=utils.default_process,
            score_cutoff=self.score_cutoff
        )
        if result is None:
            return None

        match, _score, _index = result
        return match

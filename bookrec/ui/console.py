"""
콘솔 사용자 인터페이스 모듈
==========================

도서 제목을 입력받아 비슷한 도서 목록을 출력하는 대화형 콘솔입니다.
빈 줄을 입력하거나 Ctrl+C / Ctrl+D 를 누르면 종료합니다.

작성자: AI Assistant
버전: 1.0.0
"""

import argparse
import sys
import time
from typing import Callable, List, Tuple

from ..core.config import BOOK_DATA_PATH, CACHE_DIR, DEFAULT_TOP_K
from ..core.errors import BookRecommenderError, CorruptCacheError
from ..core.recommender import RecommendationEngine, clear_cache
from ..utils.helpers import format_elapsed, format_score, truncate_text

PROMPT = "▶ "


def format_recommendations(recs: List[Tuple[str, float]]) -> List[str]:
    """
    추천 결과를 출력용 문자열 목록으로 변환

    Args:
        recs: (제목, 유사도) 리스트

    Returns:
        List[str]: ' 1. 제목  (score 0.123)' 형태의 줄 목록
    """
    return [
        f"{rank:2d}. {truncate_text(title, 80)}  (score {format_score(score)})"
        for rank, (title, score) in enumerate(recs, start=1)
    ]


def load_engine(**engine_kwargs) -> RecommendationEngine:
    """로딩 안내와 준비 시간을 출력하면서 엔진을 생성"""
    print("📚 모델을 불러오는 중입니다. 잠시만 기다려주세요...")
    start = time.perf_counter()
    engine = RecommendationEngine(**engine_kwargs)
    print(f"(준비 완료: {format_elapsed(time.perf_counter() - start)})\n")
    return engine


def run_console(engine: RecommendationEngine, top_k: int,
                read_line: Callable[[str], str] = input) -> None:
    """
    대화형 추천 루프 실행

    Args:
        engine: 추천 엔진
        top_k (int): 질의당 추천 개수
        read_line: 입력 함수 (테스트에서 교체 가능)
    """
    print("도서 제목을 입력하세요 (빈 줄을 입력하면 종료).")
    while True:
        try:
            title = read_line(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not title or not title.strip():
            break

        recs = engine.recommend(title, top_k)
        if not recs:
            print("❌ 일치하는 도서를 찾지 못했습니다.")
            continue

        for line in format_recommendations(recs):
            print(line)
        print()

    print("👋 추천기를 종료합니다.")


def parse_args(argv=None):
    """
    명령행 인자 파싱

    Returns:
        argparse.Namespace: 파싱된 인자
    """
    parser = argparse.ArgumentParser(description="콘텐츠 기반 도서 추천기")
    parser.add_argument("--data", default=BOOK_DATA_PATH, help="도서 CSV 파일 경로")
    parser.add_argument("--cache-dir", default=CACHE_DIR, help="모델/행렬 캐시 디렉토리")
    parser.add_argument("--top", type=int, default=DEFAULT_TOP_K, help="추천 개수")
    parser.add_argument("--rebuild", action="store_true", help="캐시를 지우고 처음부터 다시 계산")
    args = parser.parse_args(argv)
    if args.top < 1:
        parser.error(f"--top은 1 이상이어야 합니다: {args.top}")
    return args


def cli(argv=None):
    """
    명령행 진입점
    """
    args = parse_args(argv)

    if args.rebuild:
        for path in clear_cache(args.cache_dir):
            print(f"🗑️ 캐시 파일을 삭제했습니다: {path}")

    try:
        engine = load_engine(csv_path=args.data, cache_dir=args.cache_dir)
    except BookRecommenderError as e:
        print(f"❌ 추천기 초기화 실패: {e}")
        if isinstance(e, CorruptCacheError):
            print("💡 --rebuild 옵션으로 캐시를 다시 만들 수 있습니다.")
        sys.exit(1)

    run_console(engine, args.top)

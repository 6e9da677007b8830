"""
콘솔 인터페이스 테스트 모듈
==========================

이 모듈은 대화형 콘솔의 출력 형식과 입력 루프를 테스트합니다.

작성자: AI Assistant
버전: 1.0.0
"""

import unittest
import sys
import os
import io
import tempfile
from contextlib import redirect_stderr, redirect_stdout

# 상위 디렉토리를 Python 경로에 추가
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bookrec.ui.console import cli, format_recommendations, parse_args, run_console


class FakeEngine:
    """recommend 호출을 기록하는 가짜 엔진"""

    def __init__(self, results):
        self.results = results
        self.queries = []

    def recommend(self, title, top_k):
        self.queries.append((title, top_k))
        return self.results.get(title, [])


def _scripted_input(lines):
    """미리 정한 줄을 차례로 돌려주는 입력 함수"""
    iterator = iter(lines)

    def read_line(prompt):
        try:
            return next(iterator)
        except StopIteration:
            raise EOFError
    return read_line


class TestConsole(unittest.TestCase):
    """
    콘솔 함수들의 테스트 케이스
    """

    def test_format_recommendations(self):
        """
        추천 결과 출력 형식 테스트
        """
        lines = format_recommendations([("Dune Messiah", 0.87654), ("Foundation", 0.01)])
        self.assertEqual(lines, [
            " 1. Dune Messiah  (score 0.877)",
            " 2. Foundation  (score 0.010)",
        ])

    def test_run_console_stops_on_blank_line(self):
        """
        빈 줄을 입력하면 종료하는지 테스트
        """
        engine = FakeEngine({"Dune": [("Dune Messiah", 0.9)]})
        out = io.StringIO()
        with redirect_stdout(out):
            run_console(engine, 5, read_line=_scripted_input(["Dune", "Unknown", "", "Dune"]))

        self.assertEqual(engine.queries, [("Dune", 5), ("Unknown", 5)])
        output = out.getvalue()
        self.assertIn(" 1. Dune Messiah  (score 0.900)", output)
        self.assertIn("일치하는 도서를 찾지 못했습니다", output)

    def test_run_console_stops_on_eof(self):
        """
        입력이 끝나면(EOF) 종료하는지 테스트
        """
        engine = FakeEngine({})
        with redirect_stdout(io.StringIO()):
            run_console(engine, 3, read_line=_scripted_input(["Dune"]))
        self.assertEqual(engine.queries, [("Dune", 3)])

    def test_parse_args(self):
        """
        명령행 인자 파싱 테스트
        """
        args = parse_args(["--data", "books.csv", "--cache-dir", "c", "--top", "3", "--rebuild"])
        self.assertEqual(args.data, "books.csv")
        self.assertEqual(args.cache_dir, "c")
        self.assertEqual(args.top, 3)
        self.assertTrue(args.rebuild)

    def test_parse_args_rejects_non_positive_top(self):
        """
        --top 이 1 미만이면 인자 오류로 종료하는지 테스트
        """
        for value in ("0", "-3"):
            with self.subTest(top=value):
                with redirect_stderr(io.StringIO()):
                    with self.assertRaises(SystemExit) as ctx:
                        parse_args(["--top", value])
                self.assertEqual(ctx.exception.code, 2)

    def test_cli_exits_on_construction_failure(self):
        """
        엔진 생성에 실패하면 종료 코드 1로 끝나는지 테스트
        """
        with tempfile.TemporaryDirectory() as tmp_dir:
            missing = os.path.join(tmp_dir, "missing.csv")
            with redirect_stdout(io.StringIO()):
                with self.assertRaises(SystemExit) as ctx:
                    cli(["--data", missing, "--cache-dir", tmp_dir])
        self.assertEqual(ctx.exception.code, 1)

    def test_cli_suggests_rebuild_on_corrupt_cache(self):
        """
        캐시가 손상되었으면 --rebuild 안내를 출력하는지 테스트
        """
        with tempfile.TemporaryDirectory() as tmp_dir:
            csv_path = os.path.join(tmp_dir, "data.csv")
            with open(csv_path, 'w', encoding='utf-8') as f:
                f.write("title,authors\nDune,Frank Herbert\nFoundation,Isaac Asimov\n")
            for name in ("tfidf.pkl", "similarity.bin"):
                with open(os.path.join(tmp_dir, name), 'wb') as f:
                    f.write(b'\x00broken')

            out = io.StringIO()
            with redirect_stdout(out):
                with self.assertRaises(SystemExit):
                    cli(["--data", csv_path, "--cache-dir", tmp_dir])
        self.assertIn("--rebuild", out.getvalue())

    def test_cli_handles_malformed_model_pickle(self):
        """
        UnpicklingError가 아닌 오류를 내는 모델 파일도 종료 코드 1과 --rebuild 안내로 처리되는지 테스트
        """
        with tempfile.TemporaryDirectory() as tmp_dir:
            csv_path = os.path.join(tmp_dir, "data.csv")
            with open(csv_path, 'w', encoding='utf-8') as f:
                f.write("title,authors\nDune,Frank Herbert\nFoundation,Isaac Asimov\n")
            with open(os.path.join(tmp_dir, "tfidf.pkl"), 'wb') as f:
                f.write(b'\x80\x05K\x01K\x02R.')
            with open(os.path.join(tmp_dir, "similarity.bin"), 'wb') as f:
                f.write(b'\x00' * 4)

            out = io.StringIO()
            with redirect_stdout(out):
                with self.assertRaises(SystemExit) as ctx:
                    cli(["--data", csv_path, "--cache-dir", tmp_dir])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("--rebuild", out.getvalue())


if __name__ == '__main__':
    # 테스트 실행
    unittest.main()

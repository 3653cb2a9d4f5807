"""Command-line interface: solve Snakebird levels and Sudoku boards, run the benchmark."""

from __future__ import annotations

import argparse
from pathlib import Path

from . import solve
from .benchmark import markdown_table, run_benchmark
from .config import DuplicateCheck, EngineKind, SearchConfig, SolutionPolicy, TraversalMode
from .errors import LevelFormatError, SearchError
from .puzzles import snakebird, sudoku
from .utils.timing import PerformanceTimer


def _add_search_options(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--mode", choices=[m.value for m in TraversalMode], default="dfs",
                    help="Search mode")
    ap.add_argument("--optimize", action="store_true",
                    help="Return the shortest solution (default: first found)")
    ap.add_argument("--dedup", choices=[d.value for d in DuplicateCheck], default="canonical",
                    help="Duplicate state check")
    ap.add_argument("--progress", type=int, help="Print progress every N iterations")
    ap.add_argument("--timeout", type=float, help="Only try to solve for N seconds")
    ap.add_argument("--debug", action="store_true", help="Turn on debug tracing")


def _config(args: argparse.Namespace, engine: str = "snapshot") -> SearchConfig:
    return SearchConfig.from_dict({
        "traversal": args.mode,
        "policy": (SolutionPolicy.EXHAUSTIVE_SHORTEST if args.optimize
                   else SolutionPolicy.FIRST_FOUND),
        "duplicate_check": args.dedup,
        "engine": engine,
        "max_time_s": args.timeout,
        "progress_every": args.progress,
        "debug": args.debug,
    })


def _report(result) -> None:
    print("time taken:", round(result.duration_s, 3))
    print("iterations:", result.iterations)
    if result.error:
        print("error:", result.error)


def run_snakebird(args: argparse.Namespace) -> int:
    config = _config(args)
    problem = snakebird.SnakebirdProblem()
    failures = 0

    for path in args.files:
        print(f"===== {path} =====")
        try:
            state = snakebird.load_level(path)
        except (OSError, LevelFormatError) as exc:
            print("error:", exc)
            failures += 1
            continue
        print(snakebird.render(state))

        result = solve(problem, state, config)
        _report(result)
        if not result.solved:
            if not result.error:
                print("error: no solution found")
            failures += 1
            continue

        print("raw steps:", " ".join(result.steps))
        print("combined steps:", " ".join(snakebird.combine_steps(result.steps)))
        print()
    return 1 if failures else 0


def run_sudoku(args: argparse.Namespace) -> int:
    engine = EngineKind(args.engine)
    config = _config(args, engine=args.engine)
    generator = sudoku.fill_top_left if args.generator == "top-left" else sudoku.fill_fewest_options
    failures = 0

    for name in args.boards or list(sudoku.BOARDS):
        print(f"===== {name} =====")
        try:
            if name in sudoku.BOARDS:
                board = sudoku.BOARDS[name]
            else:
                board = sudoku.parse_board(Path(name).read_text(encoding="utf-8"))
        except (OSError, LevelFormatError) as exc:
            print("error:", exc)
            failures += 1
            continue

        print("input:")
        print(sudoku.board_to_string(board))

        if engine is EngineKind.SNAPSHOT:
            problem, state = sudoku.SudokuProblem(generator=generator), board
        else:
            problem, state = sudoku.SudokuEditProblem(generator=generator), sudoku.as_grid(board)

        try:
            result = solve(problem, state, config)
        except SearchError as exc:
            print("error:", exc)
            failures += 1
            continue

        _report(result)
        if not result.solved:
            failures += 1
            continue
        print("output:")
        print(sudoku.board_to_string(result.state))
    return 1 if failures else 0


def run_bench(args: argparse.Namespace) -> int:
    timer = PerformanceTimer(enabled=args.timing)
    rows = run_benchmark(base_config=SearchConfig(max_time_s=args.timeout), timer=timer)
    print()
    print(markdown_table(rows))
    timer.print_results()
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="puzzle-search", description="Backtracking puzzle solver")
    sub = ap.add_subparsers(dest="command", required=True)

    ap_snake = sub.add_parser("snakebird", help="Solve Snakebird levels")
    ap_snake.add_argument("files", nargs="+", help="Levels to load and solve")
    _add_search_options(ap_snake)
    ap_snake.set_defaults(func=run_snakebird)

    ap_sudoku = sub.add_parser("sudoku", help="Solve Sudoku boards")
    ap_sudoku.add_argument("boards", nargs="*",
                           help=f"Board names ({', '.join(sudoku.BOARDS)}) or files (default: all)")
    ap_sudoku.add_argument("--engine", choices=[e.value for e in EngineKind], default="snapshot",
                           help="State representation")
    ap_sudoku.add_argument("--generator", choices=["fewest", "top-left"], default="fewest",
                           help="Move generator")
    _add_search_options(ap_sudoku)
    ap_sudoku.set_defaults(func=run_sudoku)

    ap_bench = sub.add_parser("benchmark", help="Compare search modes on Sudoku")
    ap_bench.add_argument("--timeout", type=float, default=30.0, help="Seconds per run")
    ap_bench.add_argument("--timing", action="store_true", help="Print a timing report")
    ap_bench.set_defaults(func=run_bench)

    args = ap.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

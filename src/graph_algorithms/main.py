from __future__ import annotations

import argparse
import logging
from pathlib import Path

from graph_model.wire_models import AlgorithmResultValue, load_graph_json

from .config import load_algorithm_config
from .engine import AlgorithmType, GraphAlgorithmsEngine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a graph algorithm and print its recorded trace as JSON")
    parser.add_argument("graph", type=Path, help="graph exchange JSON file")
    parser.add_argument("--algorithm", required=True, choices=[item.value for item in AlgorithmType])
    parser.add_argument("--source")
    parser.add_argument("--target")
    parser.add_argument("--indent", type=int, default=2)
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    args = build_parser().parse_args(argv)

    graph = load_graph_json(args.graph.read_text(encoding="utf-8"))
    engine = GraphAlgorithmsEngine(load_algorithm_config())
    result = engine.run(args.algorithm, graph, args.source, args.target)

    print(AlgorithmResultValue.from_domain(result).model_dump_json(indent=args.indent))
    return 1 if result.error else 0


if __name__ == "__main__":
    raise SystemExit(main())

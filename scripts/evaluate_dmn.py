#!/usr/bin/env python3
"""
Evaluate one decision of a DMN file with a pluggable engine.

Usage (from project root):
  python scripts/evaluate_dmn.py samples/age_classification.dmn d1 --var age=20 --engine my_engine:build_engine

Variable values are read as JSON when possible (20 -> number, true -> boolean),
otherwise as strings. --engine defaults to DMN_SIM_ENGINE.
"""
import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def parse_var(raw: str) -> tuple[str, object]:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected name=value, got {raw!r}")
    try:
        return name, json.loads(value)
    except json.JSONDecodeError:
        return name, value


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("path", type=Path, help="DMN file")
    parser.add_argument("decision_id", help="id of the decision to evaluate")
    parser.add_argument("--var", action="append", type=parse_var, default=[], help="name=value (repeatable)")
    parser.add_argument("--engine", help="engine factory 'package.module:factory'")
    args = parser.parse_args()

    if not args.path.exists():
        print(f"Error: DMN file not found at {args.path}")
        sys.exit(1)

    from simulator import config
    from simulator.errors import DmnSimulatorError
    from simulator.services.engine import load_engine_factory
    from simulator.services.evaluation_service import EvaluationService
    from simulator.utils.logging import configure_logging

    configure_logging(level="WARNING", log_dir=None)
    try:
        service = EvaluationService(load_engine_factory(args.engine or config.ENGINE_FACTORY_PATH))
        evaluation = service.evaluate(args.path.read_bytes(), args.decision_id, dict(args.var))
    except DmnSimulatorError as e:
        print(f"Error ({e.code}): {e}")
        sys.exit(1)

    output = {"result": evaluation.payload, "matchedRuleIndexes": evaluation.matched_rule_indexes}
    print(json.dumps(output, indent=2, default=str))


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Print the decision tables of a DMN file.

Usage (from project root):
  python scripts/inspect_dmn.py samples/age_classification.dmn
  python scripts/inspect_dmn.py samples/age_classification.dmn --decision d1 --json
"""
import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("path", type=Path, help="DMN file")
    parser.add_argument("--decision", help="Only show the decision with this id")
    parser.add_argument("--json", action="store_true", help="Print the parse response as JSON")
    args = parser.parse_args()

    if not args.path.exists():
        print(f"Error: DMN file not found at {args.path}")
        sys.exit(1)

    from simulator.errors import MalformedDocumentError
    from simulator.services.parser_service import parse_decisions

    try:
        decisions = parse_decisions(args.path.read_bytes())
    except MalformedDocumentError as e:
        print(f"Error: {e}")
        sys.exit(1)
    if args.decision:
        decisions = [d for d in decisions if d.id == args.decision]
        if not decisions:
            print(f"Error: decision '{args.decision}' not found")
            sys.exit(1)

    if args.json:
        print(json.dumps({"decisions": [d.model_dump(mode="json", by_alias=True) for d in decisions]}, indent=2))
        return

    for decision in decisions:
        print(f"Decision: {decision.name} (id={decision.id})")
        if not decision.rules and not decision.inputs:
            print("  (no decision table)\n")
            continue
        for col in decision.inputs:
            allowed = f" allowed={col.allowed_values}" if col.allowed_values else ""
            if col.allowed_values_kind.value == "range":
                allowed = f" range={col.allowed_values_text}"
            print(f"  in  {col.label or col.name or col.id} [{col.type_ref or '-'}]{allowed}")
        for col in decision.outputs:
            print(f"  out {col.label or col.id} [{col.type_ref or '-'}]")
        print()
        headers = [c.label or c.name or c.id for c in decision.inputs] + [c.label or c.id for c in decision.outputs]
        print("  " + " | ".join(["#"] + headers))
        for rule in decision.rules:
            print("  " + " | ".join([str(rule.index)] + rule.input_entries + rule.output_entries))
        print()


if __name__ == "__main__":
    main()

"""
Run a calculator from the command line and print the JSON result.

Usage:
    python scripts/run_calculation.py dti incomeFrequency=monthly grossIncome=5000 housingPayment=1000
    python scripts/run_calculation.py credit_simulator currentScore=640 actions[]=payOffCollection
"""
import json
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from homecalc.calculations import build_default_registry
from homecalc.config import get_settings


def parse_pairs(pairs):
    """key=value pairs; key[]=value collects a checkbox group."""
    raw = {}
    for pair in pairs:
        key, _, value = pair.partition("=")
        if key.endswith("[]"):
            raw.setdefault(key[:-2], []).append(value)
        else:
            raw[key] = value
    return raw


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    registry = build_default_registry(get_settings().call_to_action())
    calculator_type = sys.argv[1]

    if calculator_type not in registry.list_calculator_types():
        print(f"Unknown calculator: {calculator_type}")
        print(f"Available: {', '.join(registry.list_calculator_types())}")
        sys.exit(1)

    outcome = registry.process_calculation(calculator_type, parse_pairs(sys.argv[2:]))
    print(json.dumps(outcome.to_dict(), indent=2))
    sys.exit(0 if outcome.success else 1)


if __name__ == "__main__":
    main()

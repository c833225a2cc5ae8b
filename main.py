"""
ChemCheck — Entry point.

Check an equation or a pair of formulas from the command line, or start
an interactive prompt when no arguments are given.
"""

import argparse
import logging
import sys

from chemcheck import storage
from chemcheck.engine import check_equation, check_isomers, standardize_formula
from chemcheck.errors import ChemParseError

logger = logging.getLogger("chemcheck.main")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chemcheck",
        description="Check chemical equations for balance and formulas for isomerism.",
    )
    parser.add_argument("equation", nargs="?", help='equation such as "H2 + O2 = H2O"')
    parser.add_argument("--isomer", nargs=2, metavar=("FIRST", "SECOND"),
                        help="check whether two formulas are isomers")
    parser.add_argument("--standardize", metavar="FORMULA",
                        help="print the standardized form of a formula")
    parser.add_argument("--history", action="store_true",
                        help="list recent checks")
    parser.add_argument("--clear-history", action="store_true",
                        help="delete all recorded checks")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log debug output")
    return parser


def _print_result(result: dict, show_steps: bool) -> None:
    if show_steps:
        for step in result["steps"]:
            print(f"  {step['step_number']}. {step['description']}: {step['expression']}")
    print(result["final_answer"])


def _record(kind: str, query: str, answer: str, settings: dict) -> None:
    if settings["record_history"]:
        storage.add_history(kind, query, answer)


def run_equation(text: str, settings: dict) -> int:
    try:
        result = check_equation(text)
    except ChemParseError as e:
        logger.debug("rejected input: %s", e)
        print(f"Invalid equation: {e}")
        return EXIT_INVALID
    _print_result(result, settings["show_steps"])
    _record("equation", text, result["final_answer"], settings)
    return EXIT_OK if result["balanced"] else EXIT_FAILED


def run_isomer(first: str, second: str, settings: dict) -> int:
    try:
        result = check_isomers(first, second)
    except ChemParseError as e:
        logger.debug("rejected input: %s", e)
        print(f"Invalid formula: {e}")
        return EXIT_INVALID
    _print_result(result, settings["show_steps"])
    _record("isomer", f"{first} ~ {second}", result["final_answer"], settings)
    return EXIT_OK if result["isomers"] else EXIT_FAILED


def run_standardize(text: str) -> int:
    try:
        result = standardize_formula(text)
    except ChemParseError as e:
        logger.debug("rejected input: %s", e)
        print(f"Invalid formula: {e}")
        return EXIT_INVALID
    print(result["standardized"])
    return EXIT_OK


def show_history() -> int:
    history = storage.get_history()
    if not history:
        print("No checks recorded yet.")
    for record in history:
        print(f"{record['timestamp']}  [{record['kind']}] {record['query']}  ->  {record['answer']}")
    return EXIT_OK


def repl(settings: dict) -> int:
    """Read equations (or ``isomer A B``) until EOF or ``quit``."""
    while True:
        try:
            line = input("?> ").strip()
        except EOFError:
            print()
            return EXIT_OK
        if not line:
            continue
        if line.lower() in ("quit", "exit"):
            return EXIT_OK
        words = line.split()
        if words[0].lower() == "isomer" and len(words) == 3:
            run_isomer(words[1], words[2], settings)
        else:
            run_equation(line, settings)


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = storage.get_settings()

    if args.clear_history:
        storage.clear_history()
        print("History cleared.")
        return EXIT_OK
    if args.history:
        return show_history()
    if args.standardize:
        return run_standardize(args.standardize)
    if args.isomer:
        return run_isomer(args.isomer[0], args.isomer[1], settings)
    if args.equation:
        return run_equation(args.equation, settings)
    return repl(settings)


if __name__ == "__main__":
    sys.exit(main())

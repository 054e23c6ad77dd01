from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from scholarship_eval.ingest.csv_reader import read_applications_csv
from scholarship_eval.io.results import format_results, summarize_outcomes, write_results
from scholarship_eval.rules.dispatch import evaluate_batch
from scholarship_eval.rules.outcome import EvaluationOutcome
from scholarship_eval.rules.thresholds import load_rule_config

logger = logging.getLogger("evaluate_applications")

DEFAULT_INPUT = ROOT_DIR / "data" / "ScholarshipApplications.csv"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate scholarship applications from a CSV file.")
    parser.add_argument(
        "--input",
        type=Path,
        default=DEFAULT_INPUT,
        help="Applications CSV (A/D/P/T/I rows).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional JSON file overriding rule thresholds.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional results file (.csv or .json).",
    )
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args(argv)


def _resolve_repo_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return ROOT_DIR / path


def run_evaluation(
    *,
    input_path: Path,
    config_path: Path | None = None,
    output_path: Path | None = None,
) -> list[EvaluationOutcome]:
    config = load_rule_config(_resolve_repo_path(config_path) if config_path else None)
    batch = read_applications_csv(_resolve_repo_path(input_path))
    if batch.skipped:
        logger.warning("Skipped %d applicants: %s", len(batch.skipped), ", ".join(batch.skipped))

    outcomes = evaluate_batch(batch, config)
    if output_path is not None:
        written = write_results(outcomes, _resolve_repo_path(output_path))
        logger.info("Wrote results: %s", written)
    return outcomes


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        outcomes = run_evaluation(
            input_path=args.input,
            config_path=args.config,
            output_path=args.output,
        )
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1

    for line in format_results(outcomes):
        print(line)

    summary = summarize_outcomes(outcomes)
    logger.info(
        "Summary: total=%d, accepted=%d, rejected=%d",
        summary["total"],
        summary["accepted"],
        summary["rejected"],
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""CLI entrypoint for the resume bias checker."""

from __future__ import annotations

import argparse
import logging
import os
import random
import sys
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

# Local modules read their settings from the environment at import time.
load_dotenv()

from aggregation import analyze  # noqa: E402
from inference import enrich_resumes  # noqa: E402
from models import BiasAnalysis, EnrichedResume, ResumeRecord  # noqa: E402
from normalizer import CsvParseError, normalize_rows, read_resume_csv  # noqa: E402
from report import format_summary, generate_reports  # noqa: E402
from sample_data import SAMPLE_RESUMES  # noqa: E402
from session_store import load_session, save_session  # noqa: E402

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_REPORT_FAILED = 2


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(
        description=(
            "Infer candidate demographics from a CSV of scored resumes and flag score "
            "disparities with the 80% rule. With no input, the last stored session is shown."
        )
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--input", "-i", type=Path, default=None, help="CSV file of resumes and match scores")
    source.add_argument("--sample", action="store_true", help="Analyze the built-in 10-resume sample batch")
    parser.add_argument("--report-dir", type=Path, default=None, help="Where to write the PDF report, chart and group CSV")
    parser.add_argument("--no-report", action="store_true", help="Skip writing report files")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the fallback scores given to rows without a usable score (env: RESUME_RANDOM_SEED)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log per-resume classifier decisions")
    return parser.parse_args(argv)


def is_csv_file(path: Path) -> bool:
    return path.suffix.lower() == ".csv"


def _log_progress(index: int, total: int) -> None:
    logging.info("Analyzing demographics: resume %s of %s (%.0f%%)", index + 1, total, index / total * 100)


def process_batch(records: Sequence[ResumeRecord]) -> tuple[list[EnrichedResume], BiasAnalysis]:
    """Enrich, persist and analyze one batch. A new batch replaces the stored one."""
    enriched = enrich_resumes(records, progress=_log_progress)
    save_session(enriched)
    return enriched, analyze(enriched)


def load_records(input_path: Path | None, use_sample: bool, rng: random.Random) -> list[ResumeRecord] | None:
    """Return normalized records for the requested source, None when nothing was requested."""
    if use_sample:
        logging.info("Using the built-in sample batch (%s resumes)", len(SAMPLE_RESUMES))
        return list(SAMPLE_RESUMES)
    if input_path is None:
        return None

    if not is_csv_file(input_path):
        raise CsvParseError(f"Only .csv files are accepted, got {input_path.name}")
    rows = read_resume_csv(input_path)
    logging.info("Parsed %s data rows from %s", len(rows), input_path)
    return normalize_rows(rows, rng=rng)


def run(
    input_path: Path | None = None,
    use_sample: bool = False,
    report_dir: Path | None = None,
    write_report: bool = True,
    seed: int | None = None,
) -> int:
    """Run one batch (or restore the last one) and return a process exit code."""
    rng = random.Random(seed)

    try:
        records = load_records(input_path, use_sample, rng)
    except CsvParseError as exc:
        logging.error("Error parsing CSV: %s", exc)
        return EXIT_INPUT_ERROR

    if records is None:
        resumes = load_session()
        if resumes is None:
            logging.error("No input given and no stored session to restore; use --input or --sample")
            return EXIT_INPUT_ERROR
        analysis = analyze(resumes)
    elif not records:
        logging.error("No resume rows found in %s", input_path)
        return EXIT_INPUT_ERROR
    else:
        resumes, analysis = process_batch(records)

    print(format_summary(resumes, analysis))

    if not write_report:
        return EXIT_OK

    # The stored session is already written; a failed export leaves it intact.
    try:
        paths = generate_reports(resumes, analysis, output_dir=report_dir)
    except Exception as exc:  # export failures are reported, never raised
        logging.exception("Report generation failed: %s", exc)
        print("Error generating report. Please try again.", file=sys.stderr)
        return EXIT_REPORT_FAILED

    print(f"\nReport written to {paths['pdf']}")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Initialize config and execute the CLI."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    seed = args.seed
    env_seed = os.getenv("RESUME_RANDOM_SEED")
    if seed is None and env_seed:
        try:
            seed = int(env_seed)
        except ValueError:
            logging.warning("Ignoring non-integer RESUME_RANDOM_SEED=%r", env_seed)

    return run(
        input_path=args.input,
        use_sample=args.sample,
        report_dir=args.report_dir,
        write_report=not args.no_report,
        seed=seed,
    )


if __name__ == "__main__":
    sys.exit(main())

import argparse
import asyncio
from pathlib import Path

from screener.api.main import build_orchestrator
from screener.agents.progress import LoggingProgressSink
from screener.core.config import get_settings
from screener.core.logging import setup_logging
from screener.services.llm import build_llm_provider
from screener.services.report_export import read_records_csv, rows_to_csv


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Screen a CSV of candidates against a job description.")
    parser.add_argument("candidates", type=Path, help="CSV with email and resume_link columns")
    parser.add_argument("job_description", type=Path, help="Plain-text job description")
    parser.add_argument("-o", "--output", type=Path, default=Path("screening_report.csv"))
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    settings = get_settings()
    setup_logging(settings.log_level, service=settings.app_name)

    records = read_records_csv(args.candidates)
    job_description = args.job_description.read_text(encoding="utf-8")
    orchestrator = build_orchestrator(settings, build_llm_provider(settings))
    sink = LoggingProgressSink(job_name=args.candidates.stem)

    report = asyncio.run(orchestrator.run_job(records, job_description, sink))
    if report is None:
        failure = sink.failure or {}
        raise SystemExit(f"Screening failed: {failure.get('error', 'unknown error')}")

    args.output.write_text(rows_to_csv(report.rows), encoding="utf-8")
    print(f"Screened {len(report.rows)} candidates: {report.message}")
    print(f"Output report: {args.output}")


if __name__ == "__main__":
    main()

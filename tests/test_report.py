from __future__ import annotations

import csv
from datetime import date
from pathlib import Path

import pytest

import report
from aggregation import analyze
from inference import enrich_resumes
from models import BiasAnalysis, DemographicGroup, EnrichedResume
from sample_data import SAMPLE_RESUMES

FIXED_DATE = date(2026, 3, 14)


@pytest.fixture()
def sample_batch() -> tuple[list[EnrichedResume], BiasAnalysis]:
    enriched = enrich_resumes(SAMPLE_RESUMES)
    return enriched, analyze(enriched)


def _resume(rid: str, score: float = 75.0) -> EnrichedResume:
    return EnrichedResume(
        resume_id=rid,
        text="text",
        match_score=score,
        inferred_gender="Male",
        inferred_race="White",
        gender_confidence=0.85,
        race_confidence=0.6,
        name=f"Person {rid}",
    )


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("confidence,expected", [
    (0.85, "85%"),
    (0.6, "60%"),
    (0.75, "75%"),
    (0.0, "N/A"),
])
def test_format_confidence(confidence: float, expected: str) -> None:
    assert report.format_confidence(confidence) == expected


@pytest.mark.parametrize("value,expected", [
    (88.0, "88"),
    (83.5, "83.5"),
    (62.13, "62.13"),
    (0.0, "0"),
    (123456.78, "123456.78"),
    (1234567.0, "1234567"),
    (91, "91"),
])
def test_format_number(value: float, expected: str) -> None:
    assert report.format_number(value) == expected


def test_group_rows_mark_failing_groups(sample_batch) -> None:
    _, analysis = sample_batch
    rows = report.group_rows(analysis.groups)

    assert rows[0] == ["Male - Black", "2", "91.5%", "Pass"]
    assert rows[-1] == ["Female - Black", "2", "62.5%", "Fail"]


def test_resume_rows_use_placeholders_for_missing_values() -> None:
    resume = EnrichedResume(
        resume_id="resume_1",
        text="text",
        match_score=71.234,
        inferred_gender="Unknown",
        inferred_race="Unknown",
        gender_confidence=0.0,
        race_confidence=0.0,
    )
    assert report.resume_rows([resume]) == [["N/A", "Unknown", "N/A", "Unknown", "N/A", "71.2"]]


def test_format_summary_reports_verdict_and_groups(sample_batch) -> None:
    resumes, analysis = sample_batch
    text = report.format_summary(resumes, analysis)

    assert text.startswith("Bias detected: Yes")
    assert "Total Resumes Analyzed: 10" in text
    assert "Demographic Groups Identified: 7" in text
    assert "Overall Average Score: 84.5%" in text
    assert "Female - Black" in text
    assert "Showing first" not in text


def test_format_summary_caps_resume_listing() -> None:
    resumes = [_resume(f"resume_{i}") for i in range(1, 13)]
    text = report.format_summary(resumes, analyze(resumes))

    assert text.startswith("Bias detected: No")
    assert "Person resume_10" in text
    assert "Person resume_11" not in text
    assert "Showing first 10 of 12 resumes" in text


def test_format_summary_without_groups() -> None:
    analysis = BiasAnalysis(groups=(), bias_detected=False, total_resumes=0)
    text = report.format_summary([], analysis)

    assert "No demographic groups identified." in text
    assert "Overall Average Score: 0%" in text


# ---------------------------------------------------------------------------
# Rendered outputs
# ---------------------------------------------------------------------------


def test_build_report_pdf_returns_pdf_bytes(sample_batch) -> None:
    resumes, analysis = sample_batch
    pdf = report.build_report_pdf(resumes, analysis, generated_on=FIXED_DATE)
    assert pdf.startswith(b"%PDF")


def test_build_report_pdf_handles_empty_batch() -> None:
    analysis = BiasAnalysis(groups=(), bias_detected=False, total_resumes=0)
    assert report.build_report_pdf([], analysis).startswith(b"%PDF")


def test_build_report_pdf_with_many_resumes_spans_pages() -> None:
    resumes = [_resume(f"resume_{i}", 60 + i % 40) for i in range(1, 61)]
    pdf = report.build_report_pdf(resumes, analyze(resumes), generated_on=FIXED_DATE)
    assert pdf.startswith(b"%PDF")


def test_report_filename() -> None:
    assert report.report_filename(FIXED_DATE) == "Resume_Bias_Report_2026-03-14.pdf"


def test_write_chart_produces_svg(tmp_path: Path, sample_batch) -> None:
    _, analysis = sample_batch
    path = report.write_chart(analysis.groups, tmp_path / "chart.svg")
    assert "<svg" in path.read_text(encoding="utf-8")


def test_chart_without_groups_still_renders(tmp_path: Path) -> None:
    path = report.write_chart([], tmp_path / "chart.svg")
    assert "No demographic groups identified." in path.read_text(encoding="utf-8")


def test_write_groups_csv(tmp_path: Path) -> None:
    groups = [
        DemographicGroup("Male - White", 3, 90.0),
        DemographicGroup("Female - Asian", 1, 75.0),
        DemographicGroup("Female - Black", 2, 70.5),
    ]
    path = report.write_groups_csv(groups, tmp_path / "groups.csv")

    with path.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.DictReader(fh))

    assert list(rows[0]) == report.GROUPS_CSV_COLUMNS
    assert [r["rank"] for r in rows] == ["1", "2", "3"]
    assert [r["rule_80"] for r in rows] == ["Pass", "Pass", "Fail"]
    assert rows[2]["avg_score"] == "70.5"


def test_generate_reports_writes_all_outputs(tmp_path: Path, sample_batch) -> None:
    resumes, analysis = sample_batch
    paths = report.generate_reports(resumes, analysis, output_dir=tmp_path / "out", generated_on=FIXED_DATE)

    assert set(paths) == {"pdf", "chart", "groups_csv"}
    assert paths["pdf"] == tmp_path / "out" / "Resume_Bias_Report_2026-03-14.pdf"
    assert paths["chart"].name == "bias_chart.svg"
    assert paths["groups_csv"].name == "demographic_groups.csv"
    for path in paths.values():
        assert path.exists() and path.stat().st_size > 0


def test_generate_reports_uses_configured_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(report, "REPORT_OUTPUT_DIR", str(tmp_path / "configured"))
    analysis = BiasAnalysis(groups=(), bias_detected=False, total_resumes=0)

    paths = report.generate_reports([], analysis, generated_on=FIXED_DATE)
    assert paths["pdf"].parent == tmp_path / "configured"

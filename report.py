"""Post-run reporting: renders one analysed batch into downloadable files.

Three output files are produced per run, all inside REPORT_OUTPUT_DIR:

  Resume_Bias_Report_<date>.pdf — executive summary, methodology, group table
                                  with the 80% rule verdict per group, bar
                                  chart, bias narrative and the first
                                  REPORT_RESUME_LIMIT individual resumes.

  bias_chart.svg                — standalone bar chart of group mean scores.

  demographic_groups.csv        — ranked group table, one row per group.

Also runnable standalone against the stored session:
    python report.py [output_dir]
"""

from __future__ import annotations

import csv
import logging
import os
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import Sequence
from xml.sax.saxutils import escape

from reportlab.graphics import renderSVG
from reportlab.graphics.charts.barcharts import VerticalBarChart
from reportlab.graphics.shapes import Drawing, String
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from aggregation import DISPARATE_IMPACT_RATIO, passes_threshold, round_half_up
from models import BiasAnalysis, DemographicGroup, EnrichedResume

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configurable paths / limits
# ---------------------------------------------------------------------------

REPORT_OUTPUT_DIR = os.getenv("REPORT_OUTPUT_DIR", "reports")
CHART_FILENAME = os.getenv("CHART_FILENAME", "bias_chart.svg")
GROUPS_CSV_FILENAME = os.getenv("GROUPS_CSV_FILENAME", "demographic_groups.csv")
REPORT_RESUME_LIMIT = int(os.getenv("REPORT_RESUME_LIMIT", "20"))
SUMMARY_RESUME_LIMIT = 10

REPORT_TITLE = "Resume Bias Detection Report"
FOOTER_TEXT = "AI-Powered Resume Bias Detection Report"

CHART_COLORS = ("#3b82f6", "#ef4444", "#f59e0b", "#10b981", "#8b5cf6", "#ec4899", "#06b6d4", "#84cc16")
_HEADER_FILL = colors.HexColor("#3b82f6")
_ALT_ROW_FILL = colors.HexColor("#f8fafc")
_RED = colors.HexColor("#dc2626")
_GREEN = colors.HexColor("#22c55e")

GROUPS_CSV_COLUMNS = ["rank", "demographic", "count", "avg_score", "rule_80"]

METHODOLOGY_LINES = [
    "This analysis uses AI-powered demographic inference combined with statistical bias detection:",
    "",
    "1. Gender Inference:",
    "• Name analysis using demographic datasets (85% accuracy)",
    "• Linguistic pattern analysis of resume text",
    "• Combined approach for improved accuracy",
    "",
    "2. Race/Ethnicity Inference:",
    "• Surname pattern matching against census data",
    "• Demographic probability scoring",
    "",
    "3. Bias Detection:",
    "• Disparate Impact Analysis (80% rule)",
    "• Statistical comparison across demographic groups",
    "• Identification of systematic score disparities",
]

BIAS_NARRATIVE = [
    "The analysis has identified potential bias in the resume screening process.",
    "One or more demographic groups show average scores below 80% of the highest-scoring group.",
    "",
    "Recommendations:",
    "• Review screening criteria for potential bias",
    "• Implement blind resume screening processes",
    "• Provide bias training for hiring managers",
    "• Monitor hiring metrics regularly",
    "• Consider structured interview processes",
]

NO_BIAS_NARRATIVE = [
    "The analysis shows no significant bias in the resume screening process.",
    "All demographic groups show relatively similar average scores.",
    "",
    "Recommendations:",
    "• Continue monitoring hiring metrics",
    "• Maintain current screening practices",
    "• Regular bias audits are still recommended",
    "• Consider expanding demographic tracking",
]

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def verdict_label(bias_detected: bool) -> str:
    return "BIAS DETECTED" if bias_detected else "NO SIGNIFICANT BIAS"


def rule_label(group: DemographicGroup, groups: Sequence[DemographicGroup]) -> str:
    return "Pass" if passes_threshold(group, groups) else "Fail"


def format_number(value: float) -> str:
    """88.0 -> '88', 83.5 -> '83.5', 1234567.0 -> '1234567'."""
    text = repr(round_half_up(float(value)))
    return text[:-2] if text.endswith(".0") else text


def format_confidence(confidence: float) -> str:
    """0.85 -> '85%'; a zero confidence reads as 'N/A'."""
    if not confidence:
        return "N/A"
    return f"{round_half_up(confidence * 100, 0):.0f}%"


def summary_lines(analysis: BiasAnalysis) -> list[str]:
    return [
        f"Total Resumes Analyzed: {analysis.total_resumes}",
        f"Demographic Groups Identified: {len(analysis.groups)}",
        f"Bias Detection Result: {verdict_label(analysis.bias_detected)}",
        f"Overall Average Score: {format_number(analysis.overall_average)}%",
    ]


def group_rows(groups: Sequence[DemographicGroup]) -> list[list[str]]:
    return [
        [g.demographic, str(g.count), f"{format_number(g.mean_score)}%", rule_label(g, groups)]
        for g in groups
    ]


def resume_rows(resumes: Sequence[EnrichedResume]) -> list[list[str]]:
    return [
        [
            r.name or "N/A",
            r.inferred_gender or "Unknown",
            format_confidence(r.gender_confidence),
            r.inferred_race or "Unknown",
            format_confidence(r.race_confidence),
            f"{r.match_score:.1f}",
        ]
        for r in resumes
    ]


def format_summary(resumes: Sequence[EnrichedResume], analysis: BiasAnalysis) -> str:
    """Plain-text results view for the terminal."""
    lines = [f"Bias detected: {'Yes' if analysis.bias_detected else 'No'}", ""]
    lines.extend(summary_lines(analysis))
    lines.append("")

    if analysis.groups:
        lines.append(f"{'Demographic Group':<22} {'Count':>5} {'Avg Score':>10}  80% Rule")
        for demographic, count, avg, rule in group_rows(analysis.groups):
            lines.append(f"{demographic:<22} {count:>5} {avg:>10}  {rule}")
    else:
        lines.append("No demographic groups identified.")

    shown = resumes[:SUMMARY_RESUME_LIMIT]
    if shown:
        lines.append("")
        lines.append(f"{'Name':<22} {'Gender':<8} {'Conf':>5}  {'Race':<9} {'Conf':>5} {'Score':>6}")
        for name, gender, g_conf, race, r_conf, score in resume_rows(shown):
            lines.append(f"{name[:22]:<22} {gender:<8} {g_conf:>5}  {race:<9} {r_conf:>5} {score:>6}")
        if len(resumes) > SUMMARY_RESUME_LIMIT:
            lines.append(f"Showing first {SUMMARY_RESUME_LIMIT} of {len(resumes)} resumes")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Chart
# ---------------------------------------------------------------------------


def build_group_chart(groups: Sequence[DemographicGroup], width: float = 460, height: float = 280) -> Drawing:
    """Bar chart of group mean scores on a fixed 0-100 axis."""
    drawing = Drawing(width, height)
    if not groups:
        drawing.add(String(width / 2, height / 2, "No demographic groups identified.",
                           fontName="Helvetica", fontSize=10, textAnchor="middle"))
        return drawing

    chart = VerticalBarChart()
    chart.x = 45
    chart.y = 95
    chart.width = width - 65
    chart.height = height - 115
    chart.data = [[g.mean_score for g in groups]]
    chart.valueAxis.valueMin = 0
    chart.valueAxis.valueMax = 100
    chart.valueAxis.valueStep = 20
    chart.valueAxis.labels.fontSize = 8
    chart.categoryAxis.categoryNames = [g.demographic for g in groups]
    chart.categoryAxis.labels.angle = 45
    chart.categoryAxis.labels.boxAnchor = "ne"
    chart.categoryAxis.labels.dx = -2
    chart.categoryAxis.labels.dy = -4
    chart.categoryAxis.labels.fontSize = 7
    chart.bars.strokeColor = None
    for index in range(len(groups)):
        chart.bars[(0, index)].fillColor = colors.HexColor(CHART_COLORS[index % len(CHART_COLORS)])

    drawing.add(chart)
    return drawing


def write_chart(groups: Sequence[DemographicGroup], path: str | Path) -> Path:
    path = Path(path)
    renderSVG.drawToFile(build_group_chart(groups), str(path))
    return path


# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------


class _NumberedCanvas(canvas.Canvas):
    """Canvas that defers page output so each footer can show the page total."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._page_states: list[dict] = []

    def showPage(self):
        self._page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._page_states)
        for state in self._page_states:
            self.__dict__.update(state)
            self._draw_footer(total)
            super().showPage()
        super().save()

    def _draw_footer(self, total: int) -> None:
        width, _ = self._pagesize
        self.setFont("Helvetica", 8)
        self.drawCentredString(width / 2, 10 * mm, f"Page {self._pageNumber} of {total} | {FOOTER_TEXT}")


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": base["Title"],
        "heading": base["Heading2"],
        "body": ParagraphStyle("body", parent=base["BodyText"], fontSize=10, leading=13),
        "small": ParagraphStyle("small", parent=base["BodyText"], fontSize=9, textColor=colors.grey),
        "centered": ParagraphStyle("centered", parent=base["BodyText"], alignment=1),
        "bias": ParagraphStyle("bias", parent=base["BodyText"], fontName="Helvetica-Bold", textColor=_RED),
        "no_bias": ParagraphStyle("no_bias", parent=base["BodyText"], fontName="Helvetica-Bold", textColor=_GREEN),
    }


def _table(header: list[str], rows: list[list[str]], font_size: int = 9) -> Table:
    table = Table([header] + rows, repeatRows=1, hAlign="LEFT")
    table.setStyle(TableStyle([
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("BACKGROUND", (0, 0), (-1, 0), _HEADER_FILL),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), font_size),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, _ALT_ROW_FILL]),
    ]))
    return table


def _paragraphs(lines: list[str], style: ParagraphStyle) -> list:
    out: list = []
    for line in lines:
        out.append(Spacer(1, 4) if not line else Paragraph(escape(line), style))
    return out


def build_report_pdf(
    resumes: Sequence[EnrichedResume],
    analysis: BiasAnalysis,
    generated_on: date | None = None,
) -> bytes:
    """Render the full bias report and return the PDF bytes."""
    styles = _styles()
    generated_on = generated_on or date.today()
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title=REPORT_TITLE,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
    )

    story: list = [
        Paragraph(REPORT_TITLE, styles["title"]),
        Paragraph(f"Generated on: {generated_on.isoformat()}", styles["centered"]),
        Spacer(1, 12),
        Paragraph("Executive Summary", styles["heading"]),
        *_paragraphs(summary_lines(analysis), styles["body"]),
        Spacer(1, 10),
        Paragraph("Methodology", styles["heading"]),
        *_paragraphs(METHODOLOGY_LINES, styles["body"]),
        Spacer(1, 10),
        Paragraph("Demographic Groups Analysis", styles["heading"]),
    ]

    if analysis.groups:
        story.append(_table(["Demographic Group", "Count", "Avg Score", "80% Rule"], group_rows(analysis.groups)))
        story.append(Spacer(1, 10))
    story.append(build_group_chart(analysis.groups))

    story.append(Paragraph("Bias Analysis Results", styles["heading"]))
    if analysis.bias_detected:
        story.append(Paragraph("BIAS DETECTED", styles["bias"]))
        story.extend(_paragraphs(BIAS_NARRATIVE, styles["body"]))
    else:
        story.append(Paragraph("NO SIGNIFICANT BIAS DETECTED", styles["no_bias"]))
        story.extend(_paragraphs(NO_BIAS_NARRATIVE, styles["body"]))

    if resumes:
        shown = resumes[:REPORT_RESUME_LIMIT]
        story.extend([
            Spacer(1, 12),
            Paragraph("Individual Resume Analysis", styles["heading"]),
            Paragraph(f"(Showing first {len(shown)} of {len(resumes)} resumes)", styles["small"]),
            Spacer(1, 6),
            _table(["Name", "Gender", "G.Conf", "Race", "R.Conf", "Score"], resume_rows(shown), font_size=8),
        ])

    doc.build(story, canvasmaker=_NumberedCanvas)
    return buffer.getvalue()


def report_filename(generated_on: date) -> str:
    return f"Resume_Bias_Report_{generated_on.isoformat()}.pdf"


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------


def write_groups_csv(groups: Sequence[DemographicGroup], path: str | Path) -> Path:
    path = Path(path)
    rows = [
        {
            "rank": i,
            "demographic": g.demographic,
            "count": g.count,
            "avg_score": g.mean_score,
            "rule_80": rule_label(g, groups),
        }
        for i, g in enumerate(groups, 1)
    ]
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=GROUPS_CSV_COLUMNS)
        writer.writeheader()
        writer.writerows(rows)
    return path


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def generate_reports(
    resumes: Sequence[EnrichedResume],
    analysis: BiasAnalysis,
    output_dir: str | Path | None = None,
    generated_on: date | None = None,
) -> dict[str, Path]:
    """Write the PDF report, chart and group CSV; return their paths by kind."""
    out = Path(output_dir or REPORT_OUTPUT_DIR)
    out.mkdir(parents=True, exist_ok=True)
    generated_on = generated_on or date.today()

    pdf_path = out / report_filename(generated_on)
    pdf_path.write_bytes(build_report_pdf(resumes, analysis, generated_on=generated_on))
    LOGGER.info("report: PDF (%s resumes, threshold %.0f%%) → %s",
                len(resumes), DISPARATE_IMPACT_RATIO * 100, pdf_path)

    chart_path = write_chart(analysis.groups, out / CHART_FILENAME)
    LOGGER.info("report: chart with %d groups → %s", len(analysis.groups), chart_path)

    csv_path = write_groups_csv(analysis.groups, out / GROUPS_CSV_FILENAME)
    LOGGER.info("report: group table → %s", csv_path)

    return {"pdf": pdf_path, "chart": chart_path, "groups_csv": csv_path}


# ---------------------------------------------------------------------------
# Standalone execution
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import sys

    from dotenv import load_dotenv

    from aggregation import analyze
    from session_store import SESSION_STORE_PATH, load_session

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    stored = load_session()
    if not stored:
        print(f"No enriched session found in {SESSION_STORE_PATH}")
        sys.exit(1)
    paths = generate_reports(stored, analyze(stored), sys.argv[1] if len(sys.argv) > 1 else None)
    for kind, written in paths.items():
        print(f"{kind:<10} → {written}")

"""Clinician summary PDF export."""

import logging
import textwrap
from dataclasses import dataclass, field
from datetime import date, datetime
from io import BytesIO
from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure
from matplotlib.lines import Line2D

from ..exceptions import ExportError
from ..models.alerts import AlertEvent
from ..models.health import DiureticDose
from ..models.readings import SymptomDataPoint, WeightDataPoint
from .charts import draw_weight_chart
from .storage import HeartStorage
from .trends import TrendsService, format_weight_change

logger = logging.getLogger(__name__)

REPORT_TITLE = "Heart Health Summary"
DISCLAIMER = (
    "This summary reflects patient-entered data for self-management and "
    "discussion with a clinician. It is not a medical record."
)
SEVERE_NOTE = "Orange items may be helpful to discuss with your care team"

MAX_DIURETIC_DAYS = 10
MAX_ALERTS = 10


@dataclass
class ExportData:
    """Everything that goes into the summary, sorted by date."""
    start_date: date
    end_date: date
    patient_identifier: Optional[str] = None
    weight_points: list[WeightDataPoint] = field(default_factory=list)
    symptom_points: list[SymptomDataPoint] = field(default_factory=list)
    diuretic_doses: list[DiureticDose] = field(default_factory=list)
    alert_events: list[AlertEvent] = field(default_factory=list)

    @property
    def date_range_text(self) -> str:
        return f"{self.start_date.strftime('%b %d, %Y')} - {self.end_date.strftime('%b %d, %Y')}"

    @property
    def is_empty(self) -> bool:
        return not (
            self.weight_points or self.symptom_points
            or self.diuretic_doses or self.alert_events
        )


class ExportService:
    """Collects the last 30 days of data and renders the PDF."""

    def __init__(self, storage: Optional[HeartStorage] = None):
        self.storage = storage or HeartStorage()
        self.trends = TrendsService(self.storage)

    def gather(self, today: Optional[date] = None) -> ExportData:
        start, end = self.trends.window(today)
        entries = self.trends.entries(end)

        doses = [dose for entry in entries for dose in entry.diuretic_doses]
        doses.sort(key=lambda d: d.timestamp)

        alerts = self.storage.get_alerts_in_range(start, end)
        alerts.sort(key=lambda a: (a.entry_date, a.triggered_at))

        preferences = self.storage.get_preferences()

        return ExportData(
            start_date=start,
            end_date=end,
            patient_identifier=preferences.patient_identifier_for_export,
            weight_points=self.trends.weight_points(end),
            symptom_points=self.trends.symptom_points(end),
            diuretic_doses=doses,
            alert_events=alerts,
        )

    def generate(self, today: Optional[date] = None, generated_at: Optional[datetime] = None) -> bytes:
        data = self.gather(today)
        pdf = PDFReportGenerator().generate(data, generated_at=generated_at)
        logger.info(
            "Exported summary for %s (%d bytes)", data.date_range_text, len(pdf)
        )
        return pdf

    def export_to_file(self, path: Path, today: Optional[date] = None) -> Path:
        path.write_bytes(self.generate(today))
        return path

    @staticmethod
    def default_filename(today: Optional[date] = None) -> str:
        return f"heart-health-summary-{(today or date.today()).isoformat()}.pdf"


class _PageWriter:
    """
    Lays out text top-down on US Letter pages.

    Positions are in points from the top-left corner. A new page starts
    when the cursor would cross into the footer area.
    """

    PAGE_WIDTH = 612
    PAGE_HEIGHT = 792
    MARGIN = 50
    FOOTER_HEIGHT = 60

    PRIMARY = "#111827"
    SECONDARY = "#6b7280"
    ALERT = "#dc2626"
    WARNING = "#ea580c"

    def __init__(self, pdf: PdfPages, generated_at: datetime):
        self.pdf = pdf
        self.generated_at = generated_at
        self.fig: Optional[Figure] = None
        self.y = 0.0
        self.page_count = 0
        self.new_page()

    @property
    def content_width(self) -> float:
        return self.PAGE_WIDTH - 2 * self.MARGIN

    @property
    def bottom(self) -> float:
        return self.PAGE_HEIGHT - self.MARGIN - self.FOOTER_HEIGHT

    def new_page(self) -> None:
        if self.fig is not None:
            self._finish_page()
        self.fig = Figure(figsize=(self.PAGE_WIDTH / 72, self.PAGE_HEIGHT / 72))
        self.y = self.MARGIN
        self.page_count += 1

    def ensure(self, height: float) -> None:
        if self.y + height > self.bottom:
            self.new_page()

    def _fx(self, x: float) -> float:
        return x / self.PAGE_WIDTH

    def _fy(self, y: float) -> float:
        return 1 - y / self.PAGE_HEIGHT

    def text(
        self,
        text: str,
        size: float = 10,
        color: str = PRIMARY,
        bold: bool = False,
        indent: float = 0,
        align: str = "left",
    ) -> None:
        """Draw wrapped text at the cursor and advance it."""
        line_height = size * 1.4
        # Approximate characters per line for a proportional font
        chars = max(int((self.content_width - indent) / (size * 0.5)), 20)
        for line in textwrap.wrap(text, width=chars) or [""]:
            self.ensure(line_height)
            x = self.MARGIN + indent if align == "left" else self.PAGE_WIDTH / 2
            self.fig.text(
                self._fx(x),
                self._fy(self.y + size),
                line,
                fontsize=size,
                color=color,
                fontweight="bold" if bold else "normal",
                ha=align,
            )
            self.y += line_height

    def columns(self, values: list[str], offsets: list[float], size: float = 10, color: str = PRIMARY, bold: bool = False) -> None:
        """Draw one table row."""
        line_height = size * 1.6
        self.ensure(line_height)
        for value, offset in zip(values, offsets):
            self.fig.text(
                self._fx(self.MARGIN + offset),
                self._fy(self.y + size),
                value,
                fontsize=size,
                color=color,
                fontweight="bold" if bold else "normal",
            )
        self.y += line_height

    def heading(self, text: str) -> None:
        self.ensure(40)
        self.space(8)
        self.text(text, size=13, bold=True)
        self.space(4)

    def space(self, height: float) -> None:
        self.y += height

    def chart(self, points: list[WeightDataPoint], height: float = 180) -> None:
        self.ensure(height)
        ax = self.fig.add_axes([
            self._fx(self.MARGIN + 30),
            self._fy(self.y + height),
            (self.content_width - 30) / self.PAGE_WIDTH,
            (height - 20) / self.PAGE_HEIGHT,
        ])
        draw_weight_chart(ax, points)
        for label in ax.get_xticklabels() + ax.get_yticklabels():
            label.set_fontsize(7)
        ax.yaxis.label.set_fontsize(8)
        self.y += height

    def _finish_page(self) -> None:
        footer_y = self.PAGE_HEIGHT - self.MARGIN - self.FOOTER_HEIGHT + 10
        self.fig.add_artist(Line2D(
            [self._fx(self.MARGIN), self._fx(self.PAGE_WIDTH - self.MARGIN)],
            [self._fy(footer_y), self._fy(footer_y)],
            color=self.SECONDARY,
            linewidth=0.5,
        ))
        lines = textwrap.wrap(DISCLAIMER, width=100)
        lines.append(f"Generated: {self.generated_at.strftime('%b %d, %Y at %I:%M %p')}")
        for i, line in enumerate(lines):
            self.fig.text(
                0.5,
                self._fy(footer_y + 14 + i * 11),
                line,
                fontsize=7,
                color=self.SECONDARY,
                ha="center",
            )
        self.pdf.savefig(self.fig)

    def close(self) -> None:
        self._finish_page()
        self.fig = None


class PDFReportGenerator:
    """
    Renders ExportData as a PDF.

    Sections are drawn in a fixed order: header, weight trend, symptom
    trends, diuretic history, items to discuss. Each page ends with the
    disclaimer footer.
    """

    def generate(self, data: ExportData, generated_at: Optional[datetime] = None) -> bytes:
        generated_at = generated_at or datetime.now()
        buffer = BytesIO()
        try:
            with PdfPages(buffer, metadata={"Title": REPORT_TITLE, "Creator": "heartlog"}) as pdf:
                page = _PageWriter(pdf, generated_at)
                self._draw_header(page, data)
                self._draw_weight(page, data)
                self._draw_symptoms(page, data)
                self._draw_diuretics(page, data)
                self._draw_alerts(page, data)
                page.close()
        except Exception as exc:
            logger.exception("PDF generation failed")
            raise ExportError() from exc

        pdf_bytes = buffer.getvalue()
        if not pdf_bytes:
            raise ExportError()
        return pdf_bytes

    def _draw_header(self, page: _PageWriter, data: ExportData) -> None:
        page.text(REPORT_TITLE, size=20, bold=True)
        page.text(data.date_range_text, size=11, color=page.SECONDARY)
        if data.patient_identifier:
            page.text(f"Patient: {data.patient_identifier}", size=11)
        page.space(8)

    def _draw_weight(self, page: _PageWriter, data: ExportData) -> None:
        page.heading("Weight Trend (30 Days)")
        points = data.weight_points
        if not points:
            page.text("No weight data recorded", color=page.SECONDARY)
            return

        page.chart(points)

        first, last = points[0].weight, points[-1].weight
        change_text = format_weight_change(last - first, unchanged="stable")
        page.text(
            f"Current: {last:.1f} lbs  |  Starting: {first:.1f} lbs  |  "
            f"Change: {change_text}  |  Days recorded: {len(points)}"
        )

    def _draw_symptoms(self, page: _PageWriter, data: ExportData) -> None:
        page.heading("Symptom Trends (30 Days)")
        summaries = TrendsService.symptom_summaries(data.symptom_points)
        if not summaries:
            page.text("No symptom data recorded", color=page.SECONDARY)
            return

        offsets = [0, 260, 330, 400]
        page.columns(["Symptom", "Days", "Max", "Avg"], offsets, bold=True)
        for summary in summaries:
            color = page.WARNING if summary.is_severe else page.PRIMARY
            page.columns(
                [
                    summary.symptom_type.display_name,
                    str(summary.days),
                    str(summary.max_severity),
                    f"{summary.avg_severity:.1f}",
                ],
                offsets,
                color=color,
            )

        if any(s.is_severe for s in summaries):
            page.space(4)
            page.text(SEVERE_NOTE, size=8, color=page.SECONDARY)

    def _draw_diuretics(self, page: _PageWriter, data: ExportData) -> None:
        page.heading("Diuretic History (30 Days)")
        if not data.diuretic_doses:
            page.text("No diuretic doses recorded", color=page.SECONDARY)
            return

        by_day: dict[date, list[DiureticDose]] = {}
        for dose in data.diuretic_doses:
            by_day.setdefault(dose.timestamp.date(), []).append(dose)

        for day in sorted(by_day)[-MAX_DIURETIC_DAYS:]:
            doses = ", ".join(d.description for d in by_day[day])
            page.text(f"{day.strftime('%b %d')}: {doses}")

        total = len(data.diuretic_doses)
        extra = sum(1 for d in data.diuretic_doses if d.is_extra)
        page.space(4)
        page.text(f"Total doses: {total}  |  Extra doses: {extra}", size=8, color=page.SECONDARY)

    def _draw_alerts(self, page: _PageWriter, data: ExportData) -> None:
        page.heading("Items to Discuss (30 Days)")
        if not data.alert_events:
            page.text("No items flagged for discussion", color=page.SECONDARY)
            return

        # Most recent alerts, shown in date order
        for event in data.alert_events[-MAX_ALERTS:]:
            page.ensure(50)
            page.text(
                f"{event.entry_date.strftime('%b %d, %Y')} - {event.display_name}",
                size=11,
                color=page.ALERT,
                bold=True,
            )
            page.text(event.message, indent=10)
            page.space(6)

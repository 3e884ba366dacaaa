"""Trend analysis over the last 30 days."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

import pandas as pd
from scipy import stats

from ..models import thresholds
from ..models.alerts import AlertType
from ..models.entry import DailyEntry
from ..models.health import SymptomType
from ..models.readings import SymptomDataPoint, WeightDataPoint
from .storage import HeartStorage

logger = logging.getLogger(__name__)


def format_weight_change(change: Optional[float], unchanged: str = "No change") -> Optional[str]:
    """Format a change as "+1.5 lbs", "-0.8 lbs" or "No change"."""
    if change is None:
        return None
    if abs(change) < thresholds.TREND_CHANGE_TOLERANCE:
        return unchanged
    if change > 0:
        return f"+{change:.1f} lbs"
    return f"{change:.1f} lbs"


@dataclass
class WeightTrend:
    """Summary statistics for the weight chart."""
    points: list[WeightDataPoint]
    weekly_slope: Optional[float] = None  # lbs per week, least squares

    @property
    def days_with_data(self) -> int:
        return len(self.points)

    @property
    def current_weight(self) -> Optional[float]:
        return self.points[-1].weight if self.points else None

    @property
    def starting_weight(self) -> Optional[float]:
        return self.points[0].weight if self.points else None

    @property
    def change(self) -> Optional[float]:
        if len(self.points) < 2:
            return None
        return self.current_weight - self.starting_weight

    @property
    def change_text(self) -> Optional[str]:
        return format_weight_change(self.change)

    @property
    def trend_description(self) -> Optional[str]:
        change = self.change
        if change is None:
            return None
        if abs(change) < thresholds.TREND_CHANGE_TOLERANCE:
            return "maintained"
        return "gained" if change > 0 else "lost"

    @property
    def min_weight(self) -> Optional[float]:
        return min(p.weight for p in self.points) if self.points else None

    @property
    def max_weight(self) -> Optional[float]:
        return max(p.weight for p in self.points) if self.points else None


@dataclass
class SymptomSummary:
    """Per-symptom statistics for days where the symptom was rated above 1."""
    symptom_type: SymptomType
    days: int
    max_severity: int
    avg_severity: float

    @property
    def is_severe(self) -> bool:
        return self.max_severity >= thresholds.SEVERE_SYMPTOM


class TrendsService:
    """Builds chart data for the trends view and the PDF summary."""

    def __init__(self, storage: Optional[HeartStorage] = None):
        self.storage = storage or HeartStorage()

    @staticmethod
    def window(today: Optional[date] = None, days: int = thresholds.TREND_WINDOW_DAYS) -> tuple[date, date]:
        """The reporting window: N days ending today, inclusive."""
        end = today or date.today()
        return end - timedelta(days=days - 1), end

    def entries(self, today: Optional[date] = None) -> list[DailyEntry]:
        start, end = self.window(today)
        return self.storage.get_entries_in_range(start, end)

    # ----- Weight -----

    def weight_points(self, today: Optional[date] = None) -> list[WeightDataPoint]:
        """One point per weighed day, oldest first."""
        return [
            WeightDataPoint(day=e.entry_date, weight=e.weight)
            for e in self.entries(today)
            if e.weight is not None
        ]

    def weight_trend(self, today: Optional[date] = None) -> WeightTrend:
        points = self.weight_points(today)
        return WeightTrend(points=points, weekly_slope=self.weekly_slope(points))

    @staticmethod
    def weekly_slope(points: list[WeightDataPoint]) -> Optional[float]:
        """Least-squares weight change in lbs per week."""
        if len(points) < 3:
            return None
        origin = points[0].day
        x = [(p.day - origin).days for p in points]
        y = [p.weight for p in points]
        if len(set(x)) < 2:
            return None
        result = stats.linregress(x, y)
        return float(result.slope) * 7

    # ----- Symptoms -----

    def symptom_points(self, today: Optional[date] = None) -> list[SymptomDataPoint]:
        """
        One point per logged symptom rating, oldest first.

        A point is flagged when a severe-symptom alert that day covered it.
        """
        start, end = self.window(today)
        alerted: dict[date, set[SymptomType]] = {}
        for alert in self.storage.get_alerts_in_range(start, end):
            if alert.alert_type == AlertType.SEVERE_SYMPTOM:
                alerted.setdefault(alert.entry_date, set()).update(alert.symptom_types)

        points = []
        for entry in self.entries(today):
            for symptom in entry.symptoms:
                points.append(SymptomDataPoint(
                    day=entry.entry_date,
                    symptom_type=symptom.type,
                    severity=symptom.severity,
                    has_alert=symptom.type in alerted.get(entry.entry_date, set()),
                ))
        points.sort(key=lambda p: (p.day, p.symptom_type.display_name))
        return points

    @staticmethod
    def symptom_summaries(points: list[SymptomDataPoint]) -> list[SymptomSummary]:
        """Statistics per symptom over days rated above 1, in display order."""
        frame = pd.DataFrame(
            [{"symptom": p.symptom_type.value, "severity": p.severity} for p in points if p.severity > 1],
            columns=["symptom", "severity"],
        )
        if frame.empty:
            return []

        grouped = frame.groupby("symptom")["severity"].agg(["count", "max", "mean"])
        summaries = [
            SymptomSummary(
                symptom_type=SymptomType(symptom),
                days=int(row["count"]),
                max_severity=int(row["max"]),
                avg_severity=round(float(row["mean"]), 1),
            )
            for symptom, row in grouped.iterrows()
        ]
        summaries.sort(key=lambda s: s.symptom_type.display_name)
        return summaries

    # ----- Vitals -----

    def vitals_frame(self, today: Optional[date] = None) -> pd.DataFrame:
        """Daily vitals indexed by date; missing readings are NaN."""
        columns = ["systolic", "diastolic", "map", "oxygen_saturation", "heart_rate"]
        rows = []
        for entry in self.entries(today):
            vitals = entry.vitals
            if vitals is None:
                continue
            rows.append({
                "date": entry.entry_date,
                "systolic": vitals.systolic_bp,
                "diastolic": vitals.diastolic_bp,
                "map": vitals.mean_arterial_pressure,
                "oxygen_saturation": vitals.oxygen_saturation,
                "heart_rate": vitals.resting_heart_rate,
            })

        if not rows:
            return pd.DataFrame(columns=columns)

        df = pd.DataFrame(rows)
        df["date"] = pd.to_datetime(df["date"])
        df = df.set_index("date").sort_index()
        return df[columns].astype(float)

    # ----- Summary -----

    def summary(self, today: Optional[date] = None) -> str:
        """Plain-language description of the weight trend, for screen readers and the CLI."""
        trend = self.weight_trend(today)
        if not trend.points:
            return "No weight data recorded in the last 30 days."
        if trend.change is None:
            return (
                f"One weight recorded in the last 30 days: {trend.current_weight:.1f} lbs."
            )
        if trend.trend_description == "maintained":
            movement = "maintained your weight"
        else:
            movement = f"{trend.trend_description} {abs(trend.change):.1f} lbs"
        return (
            f"Over the last 30 days you {movement}, from {trend.starting_weight:.1f} "
            f"to {trend.current_weight:.1f} lbs across {trend.days_with_data} days with data."
        )

"""Tests for trend analysis and charts."""

from datetime import date, timedelta

import pytest

from heartlog.models import DailyEntry, WeightDataPoint
from heartlog.models.health import SymptomType
from heartlog.services.charts import render_symptom_chart, render_weight_chart
from heartlog.services.today import TodayService
from heartlog.services.trends import TrendsService, WeightTrend, format_weight_change

PNG_MAGIC = b"\x89PNG"


def weigh(storage, day, weight):
    storage.save_entry(DailyEntry(entry_date=day, weight=weight))


class TestWindow:
    def test_thirty_days_inclusive(self, today):
        """Test the window covers thirty days."""
        start, end = TrendsService.window(today)
        assert end == today
        assert (end - start).days == 29


class TestWeightTrend:
    """Tests for weight trend statistics."""

    def test_points_within_window(self, storage, today):
        """Test points outside the window are dropped."""
        weigh(storage, today - timedelta(days=30), 190.0)
        weigh(storage, today - timedelta(days=29), 185.0)
        weigh(storage, today, 182.0)
        storage.save_entry(DailyEntry(entry_date=today - timedelta(days=5)))

        points = TrendsService(storage).weight_points(today)
        assert [p.weight for p in points] == [185.0, 182.0]

    def test_change_and_description(self, storage, today):
        """Test the weight change and description."""
        weigh(storage, today - timedelta(days=10), 180.0)
        weigh(storage, today, 183.5)

        trend = TrendsService(storage).weight_trend(today)
        assert trend.change == pytest.approx(3.5)
        assert trend.change_text == "+3.5 lbs"
        assert trend.trend_description == "gained"
        assert trend.weekly_slope is None

    def test_single_point(self):
        """Test a single point has no change."""
        trend = WeightTrend(points=[WeightDataPoint(day=date(2024, 3, 1), weight=180)])
        assert trend.change is None
        assert trend.change_text is None
        assert trend.current_weight == trend.starting_weight == 180

    def test_weekly_slope(self):
        """Test the weekly slope."""
        points = [
            WeightDataPoint(day=date(2024, 3, 1) + timedelta(days=i), weight=180 + 0.5 * i)
            for i in range(7)
        ]
        assert TrendsService.weekly_slope(points) == pytest.approx(3.5)

    @pytest.mark.parametrize("change,text", [
        (None, None),
        (0.05, "No change"),
        (-1.3, "-1.3 lbs"),
        (2.0, "+2.0 lbs"),
    ])
    def test_format_weight_change(self, change, text):
        """Test formatting a weight change."""
        assert format_weight_change(change) == text

    def test_summary(self, storage, today):
        """Test the plain-language summary."""
        service = TrendsService(storage)
        assert service.summary(today) == "No weight data recorded in the last 30 days."

        weigh(storage, today - timedelta(days=3), 180.0)
        weigh(storage, today, 178.0)
        assert "lost 2.0 lbs" in service.summary(today)


class TestSymptomTrends:
    """Tests for symptom points and summaries."""

    def test_points_flag_alerted_symptoms(self, storage, today):
        """Test points flag symptoms that alerted."""
        service = TodayService(storage)
        service.save_symptoms({SymptomType.ORTHOPNEA: 4, SymptomType.DIZZINESS: 2}, today)

        points = TrendsService(storage).symptom_points(today)
        flagged = {p.symptom_type: p.has_alert for p in points}
        assert flagged[SymptomType.ORTHOPNEA] is True
        assert flagged[SymptomType.DIZZINESS] is False

    def test_summaries_skip_none_ratings(self, storage, today):
        """Test summaries skip unrated days."""
        service = TodayService(storage)
        service.save_symptoms({SymptomType.PND: 2, SymptomType.SYNCOPE: 1}, today - timedelta(days=1))
        service.save_symptoms({SymptomType.PND: 5}, today)

        summaries = TrendsService.symptom_summaries(TrendsService(storage).symptom_points(today))
        assert len(summaries) == 1
        pnd = summaries[0]
        assert pnd.symptom_type == SymptomType.PND
        assert (pnd.days, pnd.max_severity, pnd.avg_severity) == (2, 5, 3.5)
        assert pnd.is_severe

    def test_no_points(self):
        """Test no points gives no summaries."""
        assert TrendsService.symptom_summaries([]) == []


class TestVitalsFrame:
    def test_empty(self, storage, today):
        """Test the vitals frame with no data."""
        assert TrendsService(storage).vitals_frame(today).empty

    def test_daily_rows(self, storage, today):
        """Test one vitals row per day."""
        TodayService(storage).save_vitals(120, 80, 96, day=today)
        frame = TrendsService(storage).vitals_frame(today)

        assert len(frame) == 1
        assert frame.iloc[0]["map"] == 93
        assert frame.iloc[0]["heart_rate"] != frame.iloc[0]["heart_rate"]  # NaN


class TestCharts:
    def test_weight_chart_png(self):
        """Test the weight chart is a PNG."""
        points = [
            WeightDataPoint(day=date(2024, 3, 1) + timedelta(days=i), weight=180 + i)
            for i in range(5)
        ]
        assert render_weight_chart(points).startswith(PNG_MAGIC)

    def test_empty_charts(self):
        """Test charts render with no data."""
        assert render_weight_chart([]).startswith(PNG_MAGIC)
        assert render_symptom_chart([]).startswith(PNG_MAGIC)

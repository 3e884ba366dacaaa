"""Tests for the health-data CSV source."""

from datetime import datetime

import pytest

from heartlog.exceptions import PermissionDeniedError
from heartlog.models.alerts import AlertType
from heartlog.sources.health_data import HealthDataSource

NOW = datetime(2024, 3, 15, 12, 0)


@pytest.fixture
def export(tmp_path):
    path = tmp_path / "health.csv"
    path.write_text(
        "timestamp,metric,value\n"
        "2024-03-01T07:00:00,heart_rate,70\n"
        "2024-03-13T07:00:00,heart_rate,125\n"
        "2024-03-14T07:00:00,heart_rate,130\n"
        "2024-03-15T07:00:00,heart_rate,128\n"
        "2024-03-15T07:05:00,blood_pressure,118/76\n"
        "2024-03-15T07:06:00,blood_pressure,bad\n"
        "2024-03-15T07:10:00,oxygen_saturation,96\n"
        "2024-03-10T07:00:00,weight,181.2\n"
        "2024-03-15T07:00:00,weight,182.0\n"
        "not-a-date,heart_rate,80\n"
        "2024-03-15T08:00:00,steps,5000\n"
    )
    return path


class TestHealthDataSource:
    """Tests for reading the CSV export."""

    def test_heart_rate_newest_first(self, export):
        """Test heart rate readings come newest first."""
        readings = HealthDataSource(path=export).heart_rate_history(now=NOW)
        assert [r.heart_rate for r in readings] == [128, 130, 125]

    def test_persistent_high(self, export):
        """Test persistent high heart rate detection."""
        assert HealthDataSource(path=export).persistent_abnormal_heart_rate(now=NOW) == AlertType.HEART_RATE_HIGH

    def test_blood_pressure_skips_malformed(self, export):
        """Test malformed blood pressure rows are skipped."""
        source = HealthDataSource(path=export)
        latest = source.latest_blood_pressure(now=NOW)

        assert latest.formatted == "118/76"
        assert source.has_recent_blood_pressure(now=NOW)
        assert not source.has_recent_blood_pressure(now=datetime(2024, 3, 17))

    def test_oxygen_and_weight(self, export):
        """Test oxygen saturation and weight readings."""
        source = HealthDataSource(path=export)
        assert source.latest_oxygen_saturation(now=NOW).percentage == 96
        assert [w.weight for w in source.weight_history(now=NOW)] == [181.2, 182.0]

    def test_not_authorized(self, export):
        """Test reading without permission."""
        with pytest.raises(PermissionDeniedError):
            HealthDataSource(path=export, authorized=False).heart_rate_history(now=NOW)

    def test_missing_file_is_empty(self, tmp_path):
        """Test a missing export means no data."""
        source = HealthDataSource(path=tmp_path / "missing.csv")
        assert not source.is_configured
        assert source.heart_rate_history(now=NOW) == []
        assert source.latest_blood_pressure(now=NOW) is None
        assert source.latest_oxygen_saturation(now=NOW) is None

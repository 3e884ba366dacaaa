"""Tests for the command-line interface."""

from datetime import date, datetime, timedelta

import pytest
from typer.testing import CliRunner

from heartlog.cli import _parse_time, app, parse_date, parse_symptom
from heartlog.exceptions import InputValidationError
from heartlog.models.alerts import AlertType
from heartlog.models.health import SymptomType
from heartlog.services.storage import HeartStorage
from heartlog.utils.config import get_settings

runner = CliRunner()


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    """Point the CLI at an empty data directory."""
    monkeypatch.setenv("HEARTLOG_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("HEARTLOG_LOG_FILE", raising=False)
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


class TestParsing:
    def test_parse_date(self):
        """Test date parsing shortcuts."""
        assert parse_date(None) == date.today()
        assert parse_date("yesterday") == date.today() - timedelta(days=1)
        assert parse_date("-7") == date.today() - timedelta(days=7)
        assert parse_date("2024-03-15") == date(2024, 3, 15)

    def test_parse_symptom(self):
        """Test symptom names and numbers."""
        assert parse_symptom("dizziness") == SymptomType.DIZZINESS
        assert parse_symptom("chest-pain") == SymptomType.CHEST_PAIN
        assert parse_symptom("1") == SymptomType.DYSPNEA_AT_REST

    def test_parse_time(self):
        """Test reminder time parsing."""
        assert _parse_time("08:30") == (8, 30)
        assert _parse_time("7:30 pm") == (19, 30)
        with pytest.raises(InputValidationError):
            _parse_time("noonish")


class TestDailyCommands:
    """Tests for weight, symptom and vitals commands."""

    def test_weight(self):
        """Test logging a weight."""
        result = runner.invoke(app, ["weight", "182.4", "--date", "2024-03-15"])
        assert result.exit_code == 0
        assert "Saved 182.4 lbs" in result.output

        with HeartStorage() as storage:
            assert storage.get_entry(date(2024, 3, 15)).weight == 182.4

    def test_weight_out_of_range(self):
        """Test an out-of-range weight exits with an error."""
        result = runner.invoke(app, ["weight", "600"])
        assert result.exit_code == 1
        assert "Weight must be less than 500 lbs" in result.output

    def test_invalid_date(self):
        """Test a malformed date is rejected."""
        result = runner.invoke(app, ["weight", "180", "--date", "March 3"])
        assert result.exit_code == 1
        assert "Invalid date format" in result.output

    def test_symptom(self):
        """Test rating a symptom."""
        result = runner.invoke(app, ["symptom", "orthopnea", "4", "--date", "2024-03-15"])
        assert result.exit_code == 0
        assert "4/5" in result.output

    def test_vitals_requires_a_value(self):
        """Test vitals needs at least one value."""
        result = runner.invoke(app, ["vitals"])
        assert result.exit_code == 1

    def test_vitals_and_show(self):
        """Test logged vitals appear in show."""
        runner.invoke(app, ["vitals", "-s", "118", "-D", "76", "--spo2", "96", "--date", "2024-03-15"])
        result = runner.invoke(app, ["show", "2024-03-15"])
        assert result.exit_code == 0
        assert "118/76" in result.output

    def test_show_missing(self):
        """Test showing a day with no entry."""
        result = runner.invoke(app, ["show", "2024-03-15"])
        assert result.exit_code == 0
        assert "No entry found" in result.output


class TestAlertCommands:
    def test_alerts_and_ack(self):
        """Test listing and acknowledging alerts."""
        runner.invoke(app, ["vitals", "--spo2", "85"])
        with HeartStorage() as storage:
            alert_id = storage.get_alerts()[0].id

        listed = runner.invoke(app, ["alerts"])
        assert listed.exit_code == 0
        assert "No alerts right now" not in listed.output

        result = runner.invoke(app, ["ack", alert_id[:8]])
        assert result.exit_code == 0
        assert "No alerts right now" in runner.invoke(app, ["alerts"]).output

    def test_ack_unknown(self):
        """Test acknowledging an unknown alert."""
        result = runner.invoke(app, ["ack", "nope"])
        assert result.exit_code == 1
        assert "Alert not found" in result.output


class TestMedicationCommands:
    """Tests for the med sub-commands and doses."""

    def test_add_list_archive(self):
        """Test adding, listing and archiving a medication."""
        result = runner.invoke(app, ["med", "add", "Furosemide", "40", "--diuretic"])
        assert result.exit_code == 0

        assert "Furosemide" in runner.invoke(app, ["med", "list"]).output

        result = runner.invoke(app, ["med", "archive", "furosemide"])
        assert result.exit_code == 0
        assert "Furosemide" in runner.invoke(app, ["med", "list", "--prior"]).output

    def test_edit_and_history(self):
        """Test a dosage edit shows in the history."""
        runner.invoke(app, ["med", "add", "Torsemide", "20", "--diuretic"])
        result = runner.invoke(app, ["med", "edit", "Torsemide", "--dosage", "40"])
        assert result.exit_code == 0

        history = runner.invoke(app, ["med", "history", "Torsemide"])
        assert "40 mg" in history.output
        assert "20 mg" in history.output

    def test_dose(self):
        """Test logging an extra diuretic dose."""
        runner.invoke(app, ["med", "add", "Furosemide", "40", "--diuretic"])
        result = runner.invoke(app, ["dose", "Furosemide", "--extra", "--date", "2024-03-15"])
        assert result.exit_code == 0
        assert "Furosemide 40mg (extra)" in result.output

    def test_dose_for_non_diuretic(self):
        """Test doses are only for diuretics."""
        runner.invoke(app, ["med", "add", "Carvedilol", "6.25"])
        result = runner.invoke(app, ["dose", "Carvedilol"])
        assert result.exit_code == 1

    def test_unknown_medication(self):
        """Test an unknown medication name."""
        result = runner.invoke(app, ["med", "archive", "missing"])
        assert result.exit_code == 1
        assert "Medication not found" in result.output


class TestReportingCommands:
    def test_trends_empty(self):
        """Test trends with no data."""
        result = runner.invoke(app, ["trends"])
        assert result.exit_code == 0
        assert "No weight data recorded" in result.output

    def test_trends_chart(self, data_dir):
        """Test saving the weight chart."""
        runner.invoke(app, ["weight", "180", "--date", "yesterday"])
        runner.invoke(app, ["weight", "181"])
        chart = data_dir / "weight.png"

        result = runner.invoke(app, ["trends", "--chart", str(chart)])
        assert result.exit_code == 0
        assert chart.read_bytes().startswith(b"\x89PNG")

    def test_export(self, data_dir):
        """Test exporting the PDF summary."""
        output = data_dir / "summary.pdf"
        result = runner.invoke(app, ["export", "--output", str(output)])
        assert result.exit_code == 0
        assert output.read_bytes().startswith(b"%PDF")


class TestSettingsCommands:
    def test_settings(self):
        """Test updating preferences."""
        result = runner.invoke(app, ["settings", "--patient", "PR", "--health-access"])
        assert result.exit_code == 0
        with HeartStorage() as storage:
            prefs = storage.get_preferences()
        assert prefs.patient_identifier == "PR"
        assert prefs.health_data_authorized

    def test_remind_needs_permission(self):
        """Test reminders need notification permission."""
        result = runner.invoke(app, ["remind", "--enable"])
        assert result.exit_code == 1
        assert "Notifications are turned off" in result.output

    def test_remind(self):
        """Test scheduling the reminder."""
        result = runner.invoke(app, ["remind", "--allow", "--enable", "--at", "20:15"])
        assert result.exit_code == 0
        assert "Next reminder" in result.output

    def test_import_health_requires_access(self, data_dir):
        """Test importing needs health data access."""
        export = data_dir / "health.csv"
        export.write_text("timestamp,metric,value\n")
        result = runner.invoke(app, ["import-health", "--file", str(export)])
        assert result.exit_code == 1
        assert "Health data access has not been granted" in result.output

    def test_import_health(self, data_dir):
        """Readings import one by one and a very low heart rate still raises its alert."""
        now = datetime.now()
        rows = [
            (3, "heart_rate", "35"),
            (2, "heart_rate", "32"),
            (1, "heart_rate", "28"),
            (1, "weight", "182.4"),
        ]
        export = data_dir / "health.csv"
        export.write_text("timestamp,metric,value\n" + "".join(
            f"{(now - timedelta(minutes=minutes)).isoformat()},{metric},{value}\n"
            for minutes, metric, value in rows
        ))
        runner.invoke(app, ["settings", "--health-access"])

        result = runner.invoke(app, ["import-health", "--file", str(export)])

        assert result.exit_code == 0
        assert "Imported weight 182.4 lbs" in result.output
        assert "Skipped heart rate" in result.output
        with HeartStorage() as storage:
            entry = storage.get_entry(date.today())
            assert entry.weight == 182.4
            assert [a.alert_type for a in storage.get_alerts(entry_date=date.today())] == [
                AlertType.HEART_RATE_LOW,
            ]

    def test_status(self):
        """Test the status table."""
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0
        assert "HeartLog Status" in result.output


class TestCheckin:
    """Tests for the guided check-in."""

    def test_reprompts_invalid_weight(self):
        """Test the check-in asks again after an invalid weight."""
        answers = ["20", "182"] + ["4"] + [""] * 7 + ["n"]
        result = runner.invoke(app, ["checkin", "2024-03-15"], input="\n".join(answers) + "\n")

        assert result.exit_code == 0
        assert "Weight must be at least 50 lbs" in result.output
        with HeartStorage() as storage:
            entry = storage.get_entry(date(2024, 3, 15))
            assert entry.weight == 182.0
            assert entry.severity_map()[SymptomType.DYSPNEA_AT_REST] == 4
            assert len(storage.get_alerts(entry_date=date(2024, 3, 15))) == 1

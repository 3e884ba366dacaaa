"""Tests for the web interface and JSON API."""

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from heartlog.models.alerts import AlertType
from heartlog.models.health import SymptomType
from heartlog.services.medications import MedicationService
from heartlog.services.today import TodayService
from heartlog.utils.config import get_settings
from heartlog.web.app import app
from heartlog.web.deps import get_storage


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestPages:
    """Tests for the HTML pages."""

    def test_home_redirects(self, client):
        """Test the home page redirects."""
        response = client.get("/", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/today/"

    def test_health(self, client):
        """Test the health check."""
        assert client.get("/health").json() == {"status": "ok"}

    def test_today_page(self, client):
        """Test the check-in page."""
        response = client.get("/today/?entry_date=2024-03-15")
        assert response.status_code == 200
        assert "Friday, March 15, 2024" in response.text
        assert "Shortness of breath at rest" in response.text

    def test_save_weight(self, client, storage):
        """Test saving a weight from the form."""
        response = client.post(
            "/today/weight",
            data={"weight": "182.4", "entry_date": "2024-03-15"},
            follow_redirects=False,
        )
        assert response.status_code == 303
        assert storage.get_entry(date(2024, 3, 15)).weight == 182.4

    def test_invalid_weight_rerenders(self, client, storage):
        """Test an invalid weight re-renders the form."""
        response = client.post("/today/weight", data={"weight": "20", "entry_date": "2024-03-15"})
        assert response.status_code == 400
        assert "Weight must be at least 50 lbs" in response.text
        assert storage.get_entry(date(2024, 3, 15)) is None

    def test_save_symptoms_shows_alert(self, client):
        """Test a severe rating shows its alert."""
        response = client.post(
            "/today/symptoms",
            data={"entry_date": "2024-03-15", SymptomType.CHEST_PAIN.value: "5"},
        )
        assert response.status_code == 200
        assert "Symptom needs attention" in response.text

    def test_save_vitals(self, client, storage):
        """Test saving vitals from the form."""
        client.post(
            "/today/vitals",
            data={"systolic": "118", "diastolic": "76", "entry_date": "2024-03-15"},
        )
        assert storage.get_entry(date(2024, 3, 15)).vitals.formatted_blood_pressure == "118/76"

    def test_non_finite_vitals_rerender(self, client, storage):
        """NaN text is a form error, not a server error."""
        response = client.post("/today/vitals", data={"heart_rate": "nan", "entry_date": "2024-03-15"})
        assert response.status_code == 400
        assert "Please enter a valid number for heart rate" in response.text
        assert storage.get_entry(date(2024, 3, 15)) is None

    def test_invalid_symptom_rating_rerenders(self, client, storage):
        """A rating that is not 1-5 re-renders the page with a message."""
        for value in ("abc", "9"):
            response = client.post(
                "/today/symptoms",
                data={"entry_date": "2024-03-15", SymptomType.DIZZINESS.value: value},
            )
            assert response.status_code == 400
            assert "Please choose a rating from 1 to 5 for feeling dizzy or lightheaded" in response.text
        assert storage.get_entry(date(2024, 3, 15)) is None

    def test_invalid_date(self, client):
        """A malformed date shows today's page with a message instead of failing."""
        response = client.get("/today/?entry_date=2024-13-45")
        assert response.status_code == 400
        assert "Invalid date: 2024-13-45" in response.text

        response = client.post("/today/weight", data={"weight": "180", "entry_date": "soon"})
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid date: soon. Use YYYY-MM-DD."}

    def test_log_and_delete_dose(self, client, storage):
        """Test logging and deleting a dose."""
        med = MedicationService(storage).add("Furosemide", 40, is_diuretic=True)
        client.post("/today/doses", data={"medication_id": med.id, "entry_date": "2024-03-15"})
        doses = storage.get_entry(date(2024, 3, 15)).diuretic_doses
        assert len(doses) == 1

        client.post(f"/today/doses/{doses[0].id}/delete", data={"entry_date": "2024-03-15"})
        assert storage.get_entry(date(2024, 3, 15)).diuretic_doses == []

    def test_medications_page(self, client, storage):
        """Test adding a medication from the form."""
        response = client.post(
            "/medications/",
            data={"name": "Torsemide", "dosage": "20", "unit": "mg", "is_diuretic": "true"},
        )
        assert response.status_code == 200
        assert "Torsemide" in response.text
        assert MedicationService(storage).list_active()[0].is_diuretic

    def test_medication_error(self, client):
        """Test a medication form error."""
        response = client.post("/medications/", data={"name": "", "dosage": "20"})
        assert response.status_code == 400
        assert "Please enter a medication name" in response.text

    def test_archive_unknown_medication(self, client):
        """Test archiving an unknown medication."""
        response = client.post("/medications/missing/archive")
        assert response.status_code == 404

    def test_trends_page_and_charts(self, client, storage):
        """Test the trends page and chart images."""
        TodayService(storage).save_weight(180, date.today() - timedelta(days=1))
        TodayService(storage).save_weight(181, date.today())

        assert client.get("/trends/").status_code == 200
        weight = client.get("/trends/weight.png")
        assert weight.headers["content-type"] == "image/png"
        assert client.get("/trends/symptoms.png").content.startswith(b"\x89PNG")

    def test_alerts_page(self, client, storage):
        """Test the alerts page and acknowledging."""
        alerts = TodayService(storage).update_severity(SymptomType.SYNCOPE, 5)
        assert "fainting or near-fainting" in client.get("/alerts/").text

        client.post(f"/alerts/{alerts[0].id}/ack")
        assert "No alerts right now." in client.get("/alerts/").text
        assert "Acknowledged" in client.get("/alerts/?all=true").text

    def test_export_pdf(self, client):
        """Test downloading the PDF."""
        response = client.get("/export/summary.pdf")
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "attachment" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")


class TestApi:
    """Tests for the JSON API."""

    def test_weight(self, client):
        """Test saving a weight through the API."""
        client.post("/api/weight", json={"weight": 180, "entry_date": "2024-03-14"})
        body = client.post("/api/weight", json={"weight": 182.5, "entry_date": "2024-03-15"}).json()

        assert body["weight_change_text"] == "Your weight is up 2.5 lbs from yesterday"
        assert body["alerts"][0]["alert_type"] == "weight_gain_24h"

    def test_weight_validation(self, client):
        """Test an API validation error."""
        response = client.post("/api/weight", json={"weight": "abc"})
        assert response.status_code == 400
        assert response.json() == {"detail": "Please enter a valid number"}

    def test_entry(self, client):
        """Test reading an entry."""
        assert client.get("/api/entries/2024-03-15").json() is None
        client.post("/api/vitals", json={"oxygen_saturation": 88, "entry_date": "2024-03-15"})
        entry = client.get("/api/entries/2024-03-15").json()
        assert entry["vitals"]["oxygen_saturation"] == 88

    def test_symptoms(self, client):
        """Test rating symptoms through the API."""
        alerts = client.post(
            "/api/symptoms",
            json={"severities": {"orthopnea": 4}, "entry_date": "2024-03-15"},
        ).json()
        assert alerts[0]["symptom_types"] == ["orthopnea"]
        assert client.get("/api/symptoms/2024-03-15").json()["orthopnea"] == 4

    def test_dizziness_uses_imported_blood_pressure(self, client, storage, tmp_path, monkeypatch):
        """Both symptom routes see a blood pressure reading from the health-data export."""
        export = tmp_path / "health.csv"
        taken = datetime.now() - timedelta(minutes=30)
        export.write_text(f"timestamp,metric,value\n{taken.isoformat()},blood_pressure,110/70\n")
        monkeypatch.setenv("HEARTLOG_HEALTH_EXPORT_PATH", str(export))
        get_settings.cache_clear()
        prefs = storage.get_preferences()
        prefs.health_data_authorized = True
        storage.save_preferences(prefs)

        try:
            alerts = client.post("/api/symptoms", json={"severities": {"dizziness": 4}}).json()
            assert alerts == []

            client.post("/today/symptoms", data={SymptomType.DIZZINESS.value: "5"})
            assert storage.get_alerts(alert_types=[AlertType.DIZZINESS_BP_CHECK]) == []
        finally:
            get_settings.cache_clear()

    def test_alert_acknowledge(self, client):
        """Test acknowledging through the API."""
        client.post("/api/vitals", json={"oxygen_saturation": 85, "entry_date": "2024-03-15"})
        alerts = client.get("/api/alerts").json()
        assert len(alerts) == 1

        client.post(f"/api/alerts/{alerts[0]['id']}/ack")
        assert client.get("/api/alerts").json() == []
        assert client.post("/api/alerts/missing/ack").status_code == 404

    def test_medication_lifecycle(self, client):
        """Test the medication lifecycle through the API."""
        med = client.post("/api/medications", json={"name": "Furosemide", "dosage": 40, "is_diuretic": True})
        assert med.status_code == 201
        med_id = med.json()["id"]

        client.patch(f"/api/medications/{med_id}", json={"dosage": 80})
        history = client.get(f"/api/medications/{med_id}/history").json()
        assert [p["dosage"] for p in history] == [80.0, 40.0]

        client.post(f"/api/medications/{med_id}/archive")
        assert client.get("/api/medications").json() == []
        assert client.get("/api/medications?prior=true").json()[0]["id"] == med_id

    def test_doses(self, client):
        """Test doses through the API."""
        med_id = client.post(
            "/api/medications", json={"name": "Furosemide", "dosage": 40, "is_diuretic": True},
        ).json()["id"]

        dose = client.post("/api/doses", json={"medication_id": med_id, "entry_date": "2024-03-15"})
        assert dose.status_code == 201
        dose_id = dose.json()["id"]

        assert len(client.get("/api/doses/2024-03-15").json()) == 1
        assert client.delete(f"/api/doses/2024-03-15/{dose_id}").status_code == 204
        assert client.delete(f"/api/doses/2024-03-15/{dose_id}").status_code == 404

    def test_trends(self, client):
        """Test trends through the API."""
        body = client.get("/api/trends").json()
        assert body["weights"] == []
        assert body["summary"] == "No weight data recorded in the last 30 days."

    def test_preferences_and_reminders(self, client):
        """Test preferences and reminders through the API."""
        prefs = client.patch("/api/preferences", json={"patient_identifier": "PR"}).json()
        assert prefs["patient_identifier"] == "PR"

        assert client.put("/api/reminders", json={"enabled": True}).status_code == 403
        client.post("/api/reminders/permission?granted=true")
        prefs = client.put("/api/reminders", json={"enabled": True, "hour": 20}).json()
        assert prefs["reminder_enabled"] is True
        assert client.get("/api/reminders/next").json()["next_reminder"] is not None

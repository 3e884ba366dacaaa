"""Health-data export reader.

Reads a CSV export with one reading per row::

    timestamp,metric,value
    2024-03-01T07:45:00,heart_rate,72
    2024-03-01T07:46:00,blood_pressure,118/76
    2024-03-01T07:47:00,oxygen_saturation,97
    2024-03-01T07:50:00,weight,182.4

A missing or unconfigured export is treated as "no data" rather than an error.
"""

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import pandas as pd

from ..exceptions import PermissionDeniedError
from ..models import thresholds
from ..models.alerts import AlertType
from ..models.readings import (
    BloodPressureReading,
    HeartRateReading,
    OxygenSaturationReading,
    WeightReading,
    persistent_heart_rate_alert,
)
from ..utils.config import Settings, get_settings

logger = logging.getLogger(__name__)

METRICS = ("heart_rate", "blood_pressure", "oxygen_saturation", "weight")


class HealthDataSource:
    """
    Health readings from a CSV export.

    Access must be granted in preferences before any reading is returned.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        authorized: bool = True,
        settings: Optional[Settings] = None,
    ):
        if path is None:
            path = (settings or get_settings()).health_export_path
        self.path = path
        self.authorized = authorized
        self._frame: Optional[pd.DataFrame] = None

    @property
    def is_configured(self) -> bool:
        return self.path is not None and self.path.exists()

    def validate(self) -> None:
        """Check that health-data access was granted.

        Raises:
            PermissionDeniedError: If the patient has not allowed access.
        """
        if not self.authorized:
            raise PermissionDeniedError(
                "Health data access has not been granted. Enable it in settings to import readings."
            )

    def load_frame(self) -> pd.DataFrame:
        """All readings as a DataFrame with timestamp, metric and value columns."""
        self.validate()

        if self._frame is not None:
            return self._frame

        empty = pd.DataFrame(columns=["timestamp", "metric", "value"])

        if not self.is_configured:
            logger.debug("No health-data export configured")
            self._frame = empty
            return empty

        df = pd.read_csv(self.path, dtype=str)
        missing = {"timestamp", "metric", "value"} - set(df.columns)
        if missing:
            logger.warning("Health-data export %s is missing columns: %s", self.path, sorted(missing))
            self._frame = empty
            return empty

        df = df[["timestamp", "metric", "value"]].copy()
        df["metric"] = df["metric"].str.strip().str.lower()
        df["value"] = df["value"].str.strip()
        df["timestamp"] = pd.to_datetime(df["timestamp"], errors="coerce")
        if getattr(df["timestamp"].dt, "tz", None) is not None:
            df["timestamp"] = df["timestamp"].dt.tz_localize(None)

        before = len(df)
        df = df.dropna(subset=["timestamp", "value"])
        df = df[df["metric"].isin(METRICS)]
        if len(df) < before:
            logger.warning("Skipped %d unreadable health-data rows", before - len(df))

        df = df.sort_values("timestamp").reset_index(drop=True)
        logger.info("Loaded %d health readings from %s", len(df), self.path)
        self._frame = df
        return df

    def _metric(self, metric: str, since: Optional[datetime] = None) -> pd.DataFrame:
        df = self.load_frame()
        df = df[df["metric"] == metric]
        if since is not None:
            df = df[df["timestamp"] >= pd.Timestamp(since)]
        return df

    # ----- Heart rate -----

    def heart_rate_history(
        self,
        days: int = thresholds.HEART_RATE_HISTORY_DAYS,
        now: Optional[datetime] = None,
    ) -> list[HeartRateReading]:
        """Heart rate readings from the last N days, newest first."""
        now = now or datetime.now()
        readings = []
        for row in self._metric("heart_rate", since=now - timedelta(days=days)).itertuples():
            value = pd.to_numeric(row.value, errors="coerce")
            if pd.isna(value):
                continue
            readings.append(HeartRateReading(
                heart_rate=int(round(float(value))),
                recorded_at=row.timestamp.to_pydatetime(),
            ))
        readings.sort(key=lambda r: r.recorded_at, reverse=True)
        return readings

    def latest_heart_rate(self, now: Optional[datetime] = None) -> Optional[HeartRateReading]:
        history = self.heart_rate_history(now=now)
        return history[0] if history else None

    def persistent_abnormal_heart_rate(self, now: Optional[datetime] = None) -> Optional[AlertType]:
        """HEART_RATE_LOW or HEART_RATE_HIGH when recent readings are all out of range."""
        return persistent_heart_rate_alert(self.heart_rate_history(now=now))

    # ----- Blood pressure -----

    def blood_pressure_history(
        self,
        hours: int = thresholds.BLOOD_PRESSURE_LOOKBACK_HOURS,
        now: Optional[datetime] = None,
    ) -> list[BloodPressureReading]:
        """Blood pressure readings from the last N hours, newest first."""
        now = now or datetime.now()
        readings = []
        for row in self._metric("blood_pressure", since=now - timedelta(hours=hours)).itertuples():
            parts = str(row.value).split("/")
            if len(parts) != 2 or not all(p.strip().isdigit() for p in parts):
                logger.warning("Skipped malformed blood pressure value %r", row.value)
                continue
            readings.append(BloodPressureReading(
                systolic=int(parts[0]),
                diastolic=int(parts[1]),
                recorded_at=row.timestamp.to_pydatetime(),
            ))
        readings.sort(key=lambda r: r.recorded_at, reverse=True)
        return readings

    def has_recent_blood_pressure(
        self,
        hours: int = thresholds.BLOOD_PRESSURE_LOOKBACK_HOURS,
        now: Optional[datetime] = None,
    ) -> bool:
        return bool(self.blood_pressure_history(hours=hours, now=now))

    def latest_blood_pressure(
        self,
        hours: int = thresholds.BLOOD_PRESSURE_LOOKBACK_HOURS,
        now: Optional[datetime] = None,
    ) -> Optional[BloodPressureReading]:
        history = self.blood_pressure_history(hours=hours, now=now)
        return history[0] if history else None

    # ----- Oxygen saturation & weight -----

    def latest_oxygen_saturation(
        self,
        hours: int = thresholds.BLOOD_PRESSURE_LOOKBACK_HOURS,
        now: Optional[datetime] = None,
    ) -> Optional[OxygenSaturationReading]:
        now = now or datetime.now()
        df = self._metric("oxygen_saturation", since=now - timedelta(hours=hours))
        values = pd.to_numeric(df["value"], errors="coerce")
        df = df[values.notna()].assign(value=values[values.notna()])
        if df.empty:
            return None
        row = df.iloc[-1]
        return OxygenSaturationReading(
            percentage=int(round(float(row["value"]))),
            recorded_at=row["timestamp"].to_pydatetime(),
        )

    def weight_history(self, days: int = thresholds.TREND_WINDOW_DAYS, now: Optional[datetime] = None) -> list[WeightReading]:
        """Weight readings (lbs) from the last N days, oldest first."""
        now = now or datetime.now()
        df = self._metric("weight", since=now - timedelta(days=days))
        values = pd.to_numeric(df["value"], errors="coerce")
        return [
            WeightReading(weight=float(value), recorded_at=ts.to_pydatetime())
            for ts, value in zip(df["timestamp"], values)
            if not pd.isna(value)
        ]

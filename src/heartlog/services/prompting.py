"""Interactive daily check-in."""

from datetime import date
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt

from ..exceptions import InputValidationError
from ..models.alerts import AlertEvent
from ..models.entry import DailyEntry
from ..models.health import SeverityLevel, SymptomType
from .storage import HeartStorage
from .today import TodayService


class CheckInPrompter:
    """
    Walks the patient through the daily check-in.

    Weight, the 8 symptoms and optional vital signs are asked in turn.
    Invalid answers are re-prompted.
    """

    def __init__(
        self,
        storage: Optional[HeartStorage] = None,
        today_service: Optional[TodayService] = None,
        console: Optional[Console] = None,
    ):
        self.storage = storage or HeartStorage()
        self.today = today_service or TodayService(self.storage)
        self.console = console or Console()

    def start_checkin(self, entry_date: Optional[date] = None) -> DailyEntry:
        entry_date = entry_date or date.today()

        self.console.print(Panel(
            f"[bold red]Daily Check-in[/bold red]\n"
            f"Date: {entry_date.strftime('%A, %B %d, %Y')}",
            title="HeartLog",
        ))

        alerts: list[AlertEvent] = []
        alerts += self._prompt_weight(entry_date)
        alerts += self._prompt_symptoms(entry_date)
        alerts += self._prompt_vitals(entry_date)

        entry = self.storage.get_or_create_entry(entry_date)
        self.console.print(Panel(entry.summary(), title="Check-in saved", style="green"))
        self.show_alerts(alerts)
        return entry

    def show_alerts(self, alerts: list[AlertEvent]) -> None:
        for alert in alerts:
            self.console.print(Panel(alert.message, title=alert.display_name, style="yellow"))

    def _prompt_weight(self, entry_date: date) -> list[AlertEvent]:
        self.console.print("\n[bold cyan]Weight[/bold cyan]")
        while True:
            value = Prompt.ask("Today's weight in lbs (blank to skip)", default="", show_default=False)
            if not value.strip():
                return []
            try:
                result = self.today.save_weight(value, entry_date)
            except InputValidationError as e:
                self.console.print(f"[red]{e.message}[/red]")
                continue
            if result.weight_change_text:
                self.console.print(f"[dim]{result.weight_change_text}[/dim]")
            return result.alerts

    def _prompt_symptoms(self, entry_date: date) -> list[AlertEvent]:
        self.console.print("\n[bold cyan]Symptoms[/bold cyan]")
        self.console.print(
            "[dim]" + ", ".join(f"{level.value} = {level.label}" for level in SeverityLevel) + "[/dim]"
        )

        current = self.today.symptom_severities(entry_date)
        severities = {}
        for symptom_type in SymptomType:
            severities[symptom_type] = IntPrompt.ask(
                symptom_type.display_name,
                default=current[symptom_type],
                choices=[str(level.value) for level in SeverityLevel],
            )
        return self.today.save_symptoms(severities, entry_date)

    def _prompt_vitals(self, entry_date: date) -> list[AlertEvent]:
        if not Confirm.ask("\nDo you have blood pressure or oxygen readings to add?", default=False):
            return []

        while True:
            systolic = Prompt.ask("Systolic (top number, blank to skip)", default="", show_default=False)
            diastolic = Prompt.ask("Diastolic (bottom number, blank to skip)", default="", show_default=False)
            spo2 = Prompt.ask("Oxygen level % (blank to skip)", default="", show_default=False)
            try:
                result = self.today.save_vitals(systolic, diastolic, spo2, day=entry_date)
            except InputValidationError as e:
                self.console.print(f"[red]{e.message}[/red]")
                continue
            return result.alerts

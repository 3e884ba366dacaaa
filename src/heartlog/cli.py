"""Command-line interface for HeartLog."""

from contextlib import contextmanager
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .exceptions import HeartLogError, InputValidationError
from .models.alerts import AlertEvent
from .models.health import SymptomType
from .services import (
    AlertService,
    DiureticDoseService,
    ExportService,
    HeartStorage,
    MedicationService,
    PreferencesService,
    ReminderService,
    TodayService,
    TrendsService,
)
from .services.charts import render_weight_chart
from .services.prompting import CheckInPrompter
from .services.reminders import REMINDER_BODY
from .sources import HealthDataSource
from .utils.config import get_settings
from .utils.logging_config import setup_logging

app = typer.Typer(
    name="heartlog",
    help="HeartLog - daily weight, symptom and vital sign tracking for heart failure",
    no_args_is_help=True,
)
med_app = typer.Typer(help="Manage your medication list", no_args_is_help=True)
app.add_typer(med_app, name="med")

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Configure logging before any command runs."""
    setup_logging(get_settings(), verbose=verbose)


@contextmanager
def reporting_errors():
    """Print HeartLog errors in red and exit with status 1."""
    try:
        yield
    except HeartLogError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(1)


def parse_date(date_str: Optional[str]) -> date:
    """Parse a date string or return today.

    Supports:
    - None or empty: today
    - "today": today
    - "yesterday": yesterday
    - "-N": N days ago (e.g., "-1" = yesterday, "-7" = a week ago)
    - "YYYY-MM-DD": specific date
    """
    if not date_str or date_str.lower() == "today":
        return date.today()

    if date_str.lower() == "yesterday":
        return date.today() - timedelta(days=1)

    # Relative days: -1, -2, -7, etc.
    if date_str.startswith("-") and date_str[1:].isdigit():
        days_ago = int(date_str[1:])
        return date.today() - timedelta(days=days_ago)

    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        console.print(f"[red]Invalid date format: {date_str}[/red]")
        console.print("[dim]Use: YYYY-MM-DD, 'yesterday', or -N (days ago)[/dim]")
        raise typer.Exit(1)


def parse_symptom(value: str) -> SymptomType:
    """Accept a symptom value ("dizziness") or its number in the check-in list (1-8)."""
    symptoms = list(SymptomType)
    if value.isdigit() and 1 <= int(value) <= len(symptoms):
        return symptoms[int(value) - 1]
    try:
        return SymptomType(value.lower().replace("-", "_"))
    except ValueError:
        console.print(f"[red]Unknown symptom: {value}[/red]")
        console.print("[dim]Choose one of: " + ", ".join(s.value for s in symptoms) + "[/dim]")
        raise typer.Exit(1)


def show_alerts(alerts: list[AlertEvent]) -> None:
    for alert in alerts:
        console.print(Panel(alert.message, title=alert.display_name, style="yellow"))


def health_source(storage: HeartStorage, path: Optional[Path] = None) -> HealthDataSource:
    preferences = storage.get_preferences()
    return HealthDataSource(path=path, authorized=preferences.health_data_authorized)


# ----- Daily logging -----


@app.command()
def weight(
    value: str = typer.Argument(..., help="Weight in lbs"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d",
        help="Date for entry (YYYY-MM-DD). Defaults to today.",
    ),
):
    """Log today's weight."""
    entry_date = parse_date(date_str)

    with HeartStorage() as storage, reporting_errors():
        result = TodayService(storage).save_weight(value, entry_date)

        console.print(f"[green]✓ Saved {result.weight:.1f} lbs for {entry_date}[/green]")
        if result.weight_change_text:
            console.print(f"[dim]{result.weight_change_text}[/dim]")
        show_alerts(result.alerts)


@app.command()
def symptom(
    symptom_name: str = typer.Argument(..., help="Symptom (e.g. dizziness) or its number 1-8"),
    severity: int = typer.Argument(..., help="Severity 1 (none) to 5 (severe)"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d",
        help="Date for entry (YYYY-MM-DD). Defaults to today.",
    ),
):
    """Rate a single symptom."""
    entry_date = parse_date(date_str)
    symptom_type = parse_symptom(symptom_name)

    with HeartStorage() as storage, reporting_errors():
        service = TodayService(storage, health_source=health_source(storage))
        alerts = service.update_severity(symptom_type, severity, entry_date)

        saved = service.symptom_severities(entry_date)[symptom_type]
        console.print(f"[green]✓ {symptom_type.display_name}: {saved}/5[/green]")
        show_alerts(alerts)


@app.command()
def checkin(
    date_str: Optional[str] = typer.Argument(
        None,
        help="Date for check-in (YYYY-MM-DD). Defaults to today.",
    ),
):
    """Guided daily check-in: weight, symptoms and vital signs."""
    entry_date = parse_date(date_str)

    with HeartStorage() as storage, reporting_errors():
        today = TodayService(storage, health_source=health_source(storage))
        CheckInPrompter(storage, today, console).start_checkin(entry_date)


@app.command()
def vitals(
    systolic: Optional[int] = typer.Option(None, "--systolic", "-s", help="Top blood pressure number"),
    diastolic: Optional[int] = typer.Option(None, "--diastolic", "-D", help="Bottom blood pressure number"),
    spo2: Optional[int] = typer.Option(None, "--spo2", "-o", help="Oxygen saturation %"),
    heart_rate: Optional[int] = typer.Option(None, "--heart-rate", "-r", help="Resting heart rate"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d",
        help="Date for entry (YYYY-MM-DD). Defaults to today.",
    ),
):
    """Log blood pressure, oxygen saturation or heart rate."""
    entry_date = parse_date(date_str)

    if all(v is None for v in (systolic, diastolic, spo2, heart_rate)):
        console.print("[yellow]Nothing to save. Pass --systolic/--diastolic, --spo2 or --heart-rate.[/yellow]")
        raise typer.Exit(1)

    with HeartStorage() as storage, reporting_errors():
        result = TodayService(storage).save_vitals(
            systolic, diastolic, spo2, heart_rate, day=entry_date,
        )
        console.print(f"[green]✓ Vital signs saved for {entry_date}[/green]")
        show_alerts(result.alerts)


@app.command()
def show(
    date_str: Optional[str] = typer.Argument(
        None,
        help="Date to show (YYYY-MM-DD). Defaults to today.",
    ),
):
    """Show a day's entry."""
    entry_date = parse_date(date_str)

    with HeartStorage() as storage:
        entry = storage.get_entry(entry_date)

        if entry is None:
            console.print(f"[yellow]No entry found for {entry_date}[/yellow]")
            raise typer.Exit(0)

        console.print(Panel(
            entry.summary(),
            title=entry_date.strftime('%A, %B %d, %Y'),
        ))

        if entry.has_symptoms:
            console.print("\n[bold]Symptoms:[/bold]")
            for s in sorted(entry.symptoms, key=lambda s: -s.severity):
                if s.severity > 1:
                    color = "red" if s.is_severe else "yellow" if s.severity == 3 else "white"
                    console.print(f"  • [{color}]{s.type.display_name}: {s.severity}/5 ({s.level.label})[/{color}]")

        if entry.vitals:
            v = entry.vitals
            console.print("\n[bold]Vital signs:[/bold]")
            if v.has_blood_pressure:
                console.print(f"  • Blood pressure: {v.formatted_blood_pressure} mmHg (MAP {v.mean_arterial_pressure})")
            if v.oxygen_saturation is not None:
                console.print(f"  • Oxygen: {v.oxygen_saturation}%")
            if v.resting_heart_rate is not None:
                console.print(f"  • Resting heart rate: {v.resting_heart_rate} bpm")

        if entry.diuretic_doses:
            console.print("\n[bold]Diuretic doses:[/bold]")
            for d in sorted(entry.diuretic_doses, key=lambda d: d.timestamp):
                console.print(f"  • {d.timestamp.strftime('%H:%M')} {d.description} [dim]{d.id[:8]}[/dim]")


@app.command(name="list")
def list_entries(
    days: int = typer.Option(
        7, "--days", "-n",
        help="Number of days to show",
    ),
):
    """List recent entries."""
    with HeartStorage() as storage:
        entries = storage.get_recent_entries(days)

        if not entries:
            console.print("[yellow]No entries found[/yellow]")
            raise typer.Exit(0)

        table = Table(title=f"Recent Entries (last {days} days)")
        table.add_column("Date", style="cyan")
        table.add_column("Weight", justify="right")
        table.add_column("Symptoms", justify="center")
        table.add_column("BP", justify="center")
        table.add_column("SpO2", justify="right")
        table.add_column("Diuretics", justify="center")

        for entry in entries:
            symptom_str = "[green]✓[/green]"
            if entry.has_symptoms:
                worst = entry.worst_symptom_severity
                color = "green" if worst <= 2 else "yellow" if worst == 3 else "red"
                count = sum(1 for s in entry.symptoms if s.severity > 1)
                symptom_str = f"[{color}]{count} ({worst}/5)[/{color}]"

            v = entry.vitals
            table.add_row(
                entry.entry_date.strftime("%Y-%m-%d"),
                f"{entry.weight:.1f}" if entry.weight is not None else "-",
                symptom_str,
                v.formatted_blood_pressure if v and v.has_blood_pressure else "-",
                f"{v.oxygen_saturation}%" if v and v.oxygen_saturation is not None else "-",
                str(len(entry.diuretic_doses)) if entry.diuretic_doses else "-",
            )

        console.print(table)


# ----- Alerts -----


@app.command()
def alerts(
    show_all: bool = typer.Option(False, "--all", "-a", help="Include acknowledged alerts"),
):
    """Show alerts that need your attention."""
    with HeartStorage() as storage:
        service = AlertService(storage)

        if show_all:
            rows = [(a.event, a.is_acknowledged) for a in service.load_all()]
        else:
            rows = [(a, False) for a in service.load_unacknowledged()]

        if not rows:
            console.print("[green]No alerts right now[/green]")
            raise typer.Exit(0)

        table = Table(title="Alerts")
        table.add_column("ID", style="dim")
        table.add_column("Date", style="cyan")
        table.add_column("Alert")
        table.add_column("Message")
        table.add_column("✓", justify="center")

        for event, acknowledged in rows:
            table.add_row(
                event.id[:8],
                event.entry_date.isoformat(),
                event.display_name,
                event.message,
                "✓" if acknowledged else "",
            )

        console.print(table)


@app.command()
def ack(
    alert_id: str = typer.Argument(..., help="Alert ID (or its first characters)"),
):
    """Acknowledge an alert."""
    with HeartStorage() as storage, reporting_errors():
        service = AlertService(storage)
        matches = [a for a in storage.get_alerts() if a.id.startswith(alert_id)]
        full_id = matches[0].id if len(matches) == 1 else alert_id
        service.acknowledge(full_id)
        console.print("[green]✓ Alert acknowledged[/green]")


# ----- Medications -----


@med_app.command("add")
def med_add(
    name: str = typer.Argument(..., help="Medication name"),
    dosage: str = typer.Argument(..., help="Dose amount, e.g. 40"),
    unit: str = typer.Option("mg", "--unit", "-u", help="mg, mcg, mL, g or units"),
    schedule: str = typer.Option("", "--schedule", "-s", help="e.g. 'Once daily in the morning'"),
    diuretic: bool = typer.Option(False, "--diuretic", help="Track daily doses for this medication"),
):
    """Add a medication."""
    with HeartStorage() as storage, reporting_errors():
        med = MedicationService(storage).add(name, dosage, unit, schedule, is_diuretic=diuretic)
        console.print(f"[green]✓ Added {med.name} {med.display_dosage}[/green] [dim]{med.id[:8]}[/dim]")


@med_app.command("list")
def med_list(
    prior: bool = typer.Option(False, "--prior", "-p", help="Show archived medications"),
):
    """List active (or archived) medications."""
    with HeartStorage() as storage:
        service = MedicationService(storage)
        medications = service.list_prior() if prior else service.list_active()

        if not medications:
            console.print("[yellow]No medications found[/yellow]")
            raise typer.Exit(0)

        table = Table(title="Prior Medications" if prior else "Current Medications")
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Dose", justify="right")
        table.add_column("Schedule")
        table.add_column("Diuretic", justify="center")
        if prior:
            table.add_column("Stopped")

        for med in medications:
            row = [
                med.id[:8],
                med.name,
                med.display_dosage,
                med.schedule or "-",
                "✓" if med.is_diuretic else "",
            ]
            if prior:
                row.append(med.archived_at.strftime("%Y-%m-%d") if med.archived_at else "-")
            table.add_row(*row)

        console.print(table)


def _resolve_medication(storage: HeartStorage, id_or_name: str):
    service = MedicationService(storage)
    matches = [m for m in storage.all_medications() if m.id.startswith(id_or_name)]
    if len(matches) == 1:
        return service, matches[0]
    return service, service.resolve(id_or_name)


@med_app.command("edit")
def med_edit(
    medication: str = typer.Argument(..., help="Medication ID or name"),
    name: Optional[str] = typer.Option(None, "--name"),
    dosage: Optional[str] = typer.Option(None, "--dosage"),
    unit: Optional[str] = typer.Option(None, "--unit", "-u"),
    schedule: Optional[str] = typer.Option(None, "--schedule", "-s"),
    diuretic: Optional[bool] = typer.Option(None, "--diuretic/--not-diuretic"),
):
    """Edit a medication. Changing the dose starts a new dosage period."""
    with HeartStorage() as storage, reporting_errors():
        service, med = _resolve_medication(storage, medication)
        med = service.update(med.id, name, dosage, unit, schedule, diuretic)
        console.print(f"[green]✓ Updated {med.name} {med.display_dosage}[/green]")


@med_app.command("archive")
def med_archive(
    medication: str = typer.Argument(..., help="Medication ID or name"),
):
    """Stop a medication. Its history is kept."""
    with HeartStorage() as storage, reporting_errors():
        service, med = _resolve_medication(storage, medication)
        med = service.archive(med.id)
        console.print(f"[green]✓ {med.name} moved to prior medications[/green]")


@med_app.command("reactivate")
def med_reactivate(
    medication: str = typer.Argument(..., help="Medication ID or name"),
    dosage: Optional[str] = typer.Option(None, "--dosage"),
    unit: Optional[str] = typer.Option(None, "--unit", "-u"),
    schedule: Optional[str] = typer.Option(None, "--schedule", "-s"),
):
    """Restart a prior medication."""
    with HeartStorage() as storage, reporting_errors():
        service, med = _resolve_medication(storage, medication)
        med = service.reactivate(med.id, dosage, unit, schedule)
        console.print(f"[green]✓ {med.name} is active again at {med.display_dosage}[/green]")


@med_app.command("history")
def med_history(
    medication: str = typer.Argument(..., help="Medication ID or name"),
):
    """Show every dosage period for a medication."""
    with HeartStorage() as storage, reporting_errors():
        service, med = _resolve_medication(storage, medication)

        table = Table(title=f"{med.name} history")
        table.add_column("Dose", justify="right")
        table.add_column("Schedule")
        table.add_column("Started", style="cyan")
        table.add_column("Ended")

        for period in service.history(med.id):
            table.add_row(
                f"{period.dosage:g} {period.unit}",
                period.schedule or "-",
                period.start_date.strftime("%Y-%m-%d"),
                period.end_date.strftime("%Y-%m-%d") if period.end_date else "[green]current[/green]",
            )

        console.print(table)


# ----- Diuretics -----


@app.command()
def dose(
    medication: str = typer.Argument(..., help="Diuretic ID or name"),
    amount: Optional[float] = typer.Option(None, "--amount", "-a", help="Defaults to the prescribed dose"),
    extra: bool = typer.Option(False, "--extra", "-x", help="Mark as an extra dose"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d",
        help="Date for entry (YYYY-MM-DD). Defaults to today.",
    ),
    delete: Optional[str] = typer.Option(None, "--delete", help="Remove the dose with this ID instead"),
):
    """Log (or remove) a diuretic dose."""
    entry_date = parse_date(date_str)

    with HeartStorage() as storage, reporting_errors():
        service = DiureticDoseService(storage)

        if delete:
            matches = [d for d in service.doses_for(entry_date) if d.id.startswith(delete)]
            service.delete_dose(matches[0].id if len(matches) == 1 else delete, entry_date)
            console.print("[green]✓ Dose removed[/green]")
            return

        _, med = _resolve_medication(storage, medication)
        logged = service.log_dose(med.id, amount=amount, extra=extra, day=entry_date)
        console.print(f"[green]✓ Logged {logged.description}[/green] [dim]{logged.id[:8]}[/dim]")

        total = len(service.doses_for(entry_date, med.id))
        console.print(f"[dim]{total} dose(s) of {med.name} on {entry_date}[/dim]")


# ----- Trends & export -----


@app.command()
def trends(
    chart: Optional[Path] = typer.Option(None, "--chart", "-c", help="Save the weight chart as PNG"),
):
    """Show 30-day weight and symptom trends."""
    with HeartStorage() as storage:
        service = TrendsService(storage)
        trend = service.weight_trend()

        console.print(Panel(service.summary(), title="Weight - last 30 days"))

        if trend.points:
            table = Table()
            table.add_column("Current", justify="right")
            table.add_column("Starting", justify="right")
            table.add_column("Change", justify="right")
            table.add_column("Per week", justify="right")
            table.add_column("Days", justify="right")
            table.add_row(
                f"{trend.current_weight:.1f} lbs",
                f"{trend.starting_weight:.1f} lbs",
                trend.change_text or "-",
                f"{trend.weekly_slope:+.1f} lbs" if trend.weekly_slope is not None else "-",
                str(trend.days_with_data),
            )
            console.print(table)

        summaries = service.symptom_summaries(service.symptom_points())
        if summaries:
            table = Table(title="Symptoms - last 30 days")
            table.add_column("Symptom", style="cyan")
            table.add_column("Days", justify="right")
            table.add_column("Max", justify="right")
            table.add_column("Avg", justify="right")
            for s in summaries:
                style = "red" if s.is_severe else None
                table.add_row(
                    s.symptom_type.display_name,
                    str(s.days),
                    str(s.max_severity),
                    f"{s.avg_severity:.1f}",
                    style=style,
                )
            console.print(table)
        else:
            console.print("[dim]No symptoms recorded in the last 30 days[/dim]")

        if chart:
            chart.write_bytes(render_weight_chart(trend.points))
            console.print(f"[green]✓ Chart saved to {chart}[/green]")


@app.command()
def export(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="PDF path"),
):
    """Create a PDF summary of the last 30 days for your care team."""
    with HeartStorage() as storage, reporting_errors():
        service = ExportService(storage)
        path = output or Path(service.default_filename())
        service.export_to_file(path)
        console.print(f"[green]✓ Summary saved to {path}[/green]")


# ----- Settings -----


@app.command()
def settings(
    patient: Optional[str] = typer.Option(None, "--patient", help="Name or ID shown on exports"),
    clear_patient: bool = typer.Option(False, "--clear-patient", help="Remove the patient identifier"),
    reset_reminder: bool = typer.Option(False, "--reset-reminder", help="Move the reminder back to 8:00 AM"),
    health_access: Optional[bool] = typer.Option(
        None, "--health-access/--no-health-access",
        help="Allow reading the health-data export",
    ),
):
    """View or change preferences."""
    with HeartStorage() as storage, reporting_errors():
        service = PreferencesService(storage)

        if patient is not None:
            service.set_patient_identifier(patient)
        if clear_patient:
            service.clear_patient_identifier()
        if reset_reminder:
            service.reset_reminder_time()
        if health_access is not None:
            service.set_health_data_access(health_access)

        prefs = service.get()
        table = Table(title="Settings")
        table.add_column("Setting", style="cyan")
        table.add_column("Value")
        table.add_row("Patient identifier", prefs.patient_identifier or "[dim]not set[/dim]")
        table.add_row(
            "Daily reminder",
            f"{prefs.formatted_reminder_time}" if prefs.reminder_enabled else "[dim]off[/dim]",
        )
        permission = prefs.notifications_authorized
        table.add_row(
            "Notifications",
            "not asked" if permission is None else "allowed" if permission else "denied",
        )
        table.add_row("Health data access", "allowed" if prefs.health_data_authorized else "not allowed")
        console.print(table)


def _parse_time(value: str) -> tuple[int, int]:
    for fmt in ("%H:%M", "%I:%M%p", "%I:%M %p", "%I%p"):
        try:
            parsed = datetime.strptime(value.strip().upper(), fmt)
            return parsed.hour, parsed.minute
        except ValueError:
            continue
    raise InputValidationError(f"Invalid time: {value}. Use HH:MM, e.g. 08:00 or 7:30 PM")


@app.command()
def remind(
    enable: Optional[bool] = typer.Option(None, "--enable/--disable", help="Turn the daily reminder on or off"),
    at: Optional[str] = typer.Option(None, "--at", "-t", help="Reminder time, e.g. 08:00"),
    allow: Optional[bool] = typer.Option(None, "--allow/--deny", help="Answer the notification permission prompt"),
    check: bool = typer.Option(False, "--check", help="Print the reminder if it is due now"),
):
    """Manage the daily check-in reminder."""
    with HeartStorage() as storage, reporting_errors():
        service = ReminderService(storage)

        if allow is not None:
            service.request_permission(allow)

        hour = minute = None
        if at:
            hour, minute = _parse_time(at)

        if enable is not None or at:
            current = service.preferences.get().reminder_enabled
            service.update_schedule(enable if enable is not None else current, hour, minute)

        if check:
            if service.is_due():
                console.print(Panel(REMINDER_BODY, title="Daily check-in"))
            return

        next_time = service.next_reminder()
        if next_time is None:
            console.print("[dim]Daily reminder is off[/dim]")
        else:
            console.print(f"Next reminder: [cyan]{next_time.strftime('%A %I:%M %p')}[/cyan]")


# ----- Health data -----


@app.command(name="import-health")
def import_health(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="CSV export (timestamp,metric,value)"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d",
        help="Date for entry (YYYY-MM-DD). Defaults to today.",
    ),
):
    """Import the latest readings from a health-data export."""
    entry_date = parse_date(date_str)

    with HeartStorage() as storage, reporting_errors():
        source = health_source(storage, file)
        source.validate()

        if not source.is_configured:
            console.print("[yellow]No health-data export found. Set HEARTLOG_HEALTH_EXPORT_PATH or pass --file.[/yellow]")
            raise typer.Exit(0)

        result = TodayService(storage, health_source=source).import_health_data(source, entry_date)

        for label in result.imported:
            if label == "weight":
                console.print(f"[green]✓ Imported weight {result.weight:.1f} lbs[/green]")
            else:
                console.print(f"[green]✓ Imported {label}[/green]")
        for label in result.skipped:
            console.print(f"[yellow]Skipped {label}: reading out of range[/yellow]")

        if not result.found_readings:
            console.print("[yellow]No recent readings in the export[/yellow]")
        show_alerts(result.alerts)


@app.command()
def status():
    """Show configuration and data status."""
    settings = get_settings()

    with HeartStorage() as storage:
        prefs = storage.get_preferences()
        unacknowledged = len(AlertService(storage).load_unacknowledged())
        active_meds = len(MedicationService(storage).list_active())
        entries = len(storage.entries)

    table = Table(title="HeartLog Status")
    table.add_column("Item", style="cyan")
    table.add_column("Status", justify="center")

    table.add_row("Entries", str(entries))
    table.add_row("Active medications", str(active_meds))
    table.add_row(
        "Open alerts",
        f"[yellow]{unacknowledged}[/yellow]" if unacknowledged else "[green]0[/green]",
    )
    table.add_row(
        "Health-data export",
        "[green]✓ Configured[/green]" if settings.has_health_export else "[yellow]Not configured[/yellow]",
    )
    table.add_row(
        "Health-data access",
        "[green]✓ Allowed[/green]" if prefs.health_data_authorized else "[yellow]Not allowed[/yellow]",
    )

    console.print(table)
    console.print(f"\nData directory: {settings.data_dir.absolute()}")


@app.command()
def web(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Host to bind to"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Start the web interface."""
    import uvicorn

    settings = get_settings()
    host = host or settings.web_host
    port = port or settings.web_port

    console.print(f"[green]Starting web interface at http://{host}:{port}[/green]")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "heartlog.web.app:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    app()

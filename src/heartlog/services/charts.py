"""Chart rendering with matplotlib."""

from io import BytesIO
from typing import Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.dates as mdates
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from ..models import thresholds
from ..models.health import SymptomType
from ..models.readings import SymptomDataPoint, WeightDataPoint

LINE_COLOR = "#2563eb"
ALERT_COLOR = "#dc2626"
GRID_COLOR = "#e5e7eb"
MUTED_COLOR = "#6b7280"


def draw_weight_chart(ax: Axes, points: list[WeightDataPoint]) -> None:
    """Draw the weight line chart on an existing axes."""
    if not points:
        ax.text(
            0.5, 0.5, "No weight data recorded",
            ha="center", va="center", color=MUTED_COLOR, transform=ax.transAxes,
        )
        ax.set_xticks([])
        ax.set_yticks([])
        return

    days = [p.day for p in points]
    weights = [p.weight for p in points]

    ax.plot(days, weights, color=LINE_COLOR, linewidth=2, marker="o", markersize=4)

    # Pad the y range so a flat line is still readable
    low, high = min(weights), max(weights)
    padding = max((high - low) * 0.15, 2.0)
    ax.set_ylim(low - padding, high + padding)

    ax.set_ylabel("Weight (lbs)")
    ax.grid(True, color=GRID_COLOR, linewidth=0.8)
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%b %d"))
    ax.xaxis.set_major_locator(mdates.AutoDateLocator(maxticks=8))
    for spine in ("top", "right"):
        ax.spines[spine].set_visible(False)


def draw_symptom_chart(
    ax: Axes,
    points: list[SymptomDataPoint],
    symptom_types: Optional[list[SymptomType]] = None,
) -> None:
    """Draw severity lines for each symptom; alerted points are marked in red."""
    if symptom_types is not None:
        points = [p for p in points if p.symptom_type in symptom_types]

    if not points:
        ax.text(
            0.5, 0.5, "No symptoms recorded",
            ha="center", va="center", color=MUTED_COLOR, transform=ax.transAxes,
        )
        ax.set_xticks([])
        ax.set_yticks([])
        return

    by_type: dict[SymptomType, list[SymptomDataPoint]] = {}
    for p in points:
        by_type.setdefault(p.symptom_type, []).append(p)

    for symptom_type in sorted(by_type, key=lambda s: s.display_name):
        series = sorted(by_type[symptom_type], key=lambda p: p.day)
        ax.plot(
            [p.day for p in series],
            [p.severity for p in series],
            linewidth=1.5,
            marker="o",
            markersize=3,
            label=symptom_type.display_name,
        )
        alerted = [p for p in series if p.has_alert]
        if alerted:
            ax.scatter(
                [p.day for p in alerted],
                [p.severity for p in alerted],
                color=ALERT_COLOR,
                s=40,
                zorder=3,
            )

    ax.axhline(thresholds.SEVERE_SYMPTOM, color=ALERT_COLOR, linestyle="--", linewidth=0.8)
    ax.set_ylim(0.5, 5.5)
    ax.set_yticks([1, 2, 3, 4, 5])
    ax.set_ylabel("Severity")
    ax.grid(True, color=GRID_COLOR, linewidth=0.8)
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%b %d"))
    ax.legend(loc="upper left", fontsize=7, frameon=False)
    for spine in ("top", "right"):
        ax.spines[spine].set_visible(False)


def _to_png(fig: Figure) -> bytes:
    buffer = BytesIO()
    fig.savefig(buffer, format="png", dpi=100)
    return buffer.getvalue()


def render_weight_chart(points: list[WeightDataPoint], title: str = "Weight - last 30 days") -> bytes:
    """Weight line chart as PNG bytes."""
    fig = Figure(figsize=(8, 3.5))
    ax = fig.add_subplot(1, 1, 1)
    draw_weight_chart(ax, points)
    ax.set_title(title)
    fig.autofmt_xdate()
    fig.tight_layout()
    return _to_png(fig)


def render_symptom_chart(
    points: list[SymptomDataPoint],
    symptom_types: Optional[list[SymptomType]] = None,
    title: str = "Symptoms - last 30 days",
) -> bytes:
    """Symptom severity chart as PNG bytes."""
    fig = Figure(figsize=(8, 3.5))
    ax = fig.add_subplot(1, 1, 1)
    draw_symptom_chart(ax, points, symptom_types)
    ax.set_title(title)
    fig.autofmt_xdate()
    fig.tight_layout()
    return _to_png(fig)

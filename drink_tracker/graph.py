"""
BAC-over-time graph. Produces image file or returns data for web clients.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from drink_tracker.calculations import BacPoint
from drink_tracker.status import LEGAL_LIMIT_PROFESSIONAL, LEGAL_LIMIT_REGULAR, format_permille


def curve_data(points: Sequence[BacPoint]) -> List[dict]:
    """[{"time": iso8601, "bac": percent}] for use in any frontend."""
    return [{"time": p.time.isoformat(), "bac": p.bac} for p in points]


def save_bac_graph(
    points: Sequence[BacPoint],
    output_path: str = "bac_graph.png",
    sober_at: Optional[datetime] = None,
    title: str = "Blood Alcohol Content over time",
) -> str:
    """
    Plot BAC curve with matplotlib and save to file.
    Returns path to saved file.
    """
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.dates as mdates
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(10, 5))
    if points:
        times = [p.time for p in points]
        bacs = [p.bac for p in points]
        ax.plot(times, bacs, color="#2563eb", linewidth=2, label="BAC")
        ax.fill_between(times, bacs, alpha=0.2, color="#2563eb")
        ax.xaxis.set_major_formatter(mdates.DateFormatter("%H:%M"))
    ax.axhline(
        y=LEGAL_LIMIT_REGULAR,
        color="#dc2626",
        linestyle="--",
        linewidth=1,
        label=f"Regular limit ({format_permille(LEGAL_LIMIT_REGULAR)})",
    )
    ax.axhline(
        y=LEGAL_LIMIT_PROFESSIONAL,
        color="#f59e0b",
        linestyle="--",
        linewidth=1,
        label=f"Professional limit ({format_permille(LEGAL_LIMIT_PROFESSIONAL)})",
    )
    if sober_at is not None:
        ax.axvline(x=sober_at, color="#16a34a", linestyle=":", linewidth=1, label="Sober")
    ax.set_xlabel("Time")
    ax.set_ylabel("BAC (%)")
    ax.set_title(title)
    ax.legend(loc="upper right")
    ax.set_ylim(bottom=0)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path

# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.padding import Padding
from rich.table import Table
from rich.text import Text

from gotrack.model.entry import Entry
from gotrack.service.stats import DAYS_OF_WEEK, Summary
from gotrack.view.views.entry import entries_view
from gotrack.view.views.header import header

BAR_WIDTH = 40
LABEL_WIDTH = 24
CATEGORY_COLORS = [
    "deep_sky_blue1",
    "indian_red1",
    "gold1",
    "medium_turquoise",
    "medium_purple1",
    "dark_orange",
    "grey62",
]


def build_bar_row(label: str, count: int, max_count: int, style: str) -> Text:
    """
    Build one row of a horizontal bar chart.

    Args:
        label: Text for the left column, truncated to LABEL_WIDTH
        count: Value for this row
        max_count: Largest value in the chart, which fills BAR_WIDTH
        style: Rich style for the bar

    Returns:
        Rich Text object with the label, the bar and the count
    """
    row = Text()

    left_col = label
    if len(left_col) > LABEL_WIDTH:
        left_col = left_col[: LABEL_WIDTH - 3] + "..."
    else:
        left_col = left_col.ljust(LABEL_WIDTH)
    row.append(left_col, style="bold")

    width = 0
    if max_count > 0:
        width = round(count / max_count * BAR_WIDTH)
    # Non-zero counts always get a visible bar
    if count > 0 and width == 0:
        width = 1
    row.append("█" * width, style=style)
    row.append(f" {count}")
    return row


def bar_chart_view(title: str, counts: dict[str, int]) -> None:
    console = Console()
    console.print(Padding(f"[sandy_brown]{title}[/sandy_brown]", (1, 0, 0, 1)))

    max_count = max(counts.values(), default=0)
    for i, (label, count) in enumerate(counts.items()):
        style = CATEGORY_COLORS[i % len(CATEGORY_COLORS)]
        console.print(Padding(build_bar_row(label, count, max_count, style), (0, 1)))


def summary_view(summary: Summary) -> None:
    summary_table = Table(box=box.SIMPLE)
    summary_table.add_column("statistic")
    summary_table.add_column("value")

    average = summary["average_hours_between"]
    since_last = summary["hours_since_last"]
    summary_table.add_row("total entries", str(summary["total"]))
    summary_table.add_row(
        "average time between",
        "N/A" if average is None else f"{average:.1f} hours",
    )
    summary_table.add_row(
        "time since last",
        "N/A" if since_last is None else f"{since_last} hours",
    )

    console = Console()
    console.print(summary_table)


def stats_view(
    summary: Summary,
    distributions: dict[str, dict[str, int]],
    day_of_week_counts: list[int],
    hour_of_day_counts: list[int],
    recent_entries: list[Entry],
) -> None:
    header("stats")
    summary_view(summary)

    if summary["total"] == 0:
        return

    for field, counts in distributions.items():
        bar_chart_view(f"{field} distribution", counts)

    bar_chart_view("day of week", dict(zip(DAYS_OF_WEEK, day_of_week_counts)))
    bar_chart_view(
        "time of day",
        {f"{hour:02d}:00": count for hour, count in enumerate(hour_of_day_counts)},
    )

    entries_view("recent records", recent_entries)

"""Rich table rendering for classification and analytics results."""

from __future__ import annotations

from typing import Sequence

from rich import box
from rich.table import Table

from .config import ClassificationConfig
from .constants import PRIORITY_STYLES, TABLE_CONFIG, TREND_STYLES
from .models import (
    IssueClassification,
    IssueInsights,
    PerformanceMetrics,
    TopTasksResult,
    TrendAnalysis,
)
from .utils import truncate_text


def _table(title: str) -> Table:
    return Table(
        title=title,
        box=getattr(box, TABLE_CONFIG['box_style']),
        header_style=TABLE_CONFIG['header_style'],
        title_style="title",
    )


def _priority(value: str) -> str:
    style = PRIORITY_STYLES.get(value, "value")
    return f"[{style}]{value}[/]"


def create_classification_table(
    results: Sequence[IssueClassification], titles: dict[int, str]
) -> Table:
    """Build a table of issue classifications.

    Args:
        results: Classification results
        titles: Issue titles keyed by issue number

    Returns:
        Rich table ready to print
    """
    table = _table("Issue Classifications")
    table.add_column("#", justify="right", style="muted")
    table.add_column("Title", style="value")
    table.add_column("Category", style="accent")
    table.add_column("Confidence", justify="right")
    table.add_column("Priority")

    for result in results:
        title = truncate_text(titles.get(result.issue_number, ""), TABLE_CONFIG['title_max_length'])
        table.add_row(
            str(result.issue_number),
            title,
            result.primary_category.value,
            f"{result.primary_confidence:.2f}",
            _priority(result.estimated_priority.value),
        )
    return table


def create_top_tasks_table(result: TopTasksResult) -> Table:
    table = _table(f"Top Tasks ({len(result.tasks)} of {result.total_analyzed} open issues)")
    table.add_column("Rank", justify="right", style="muted")
    table.add_column("#", justify="right", style="muted")
    table.add_column("Title", style="value")
    table.add_column("Score", justify="right", style="accent")
    table.add_column("Category")
    table.add_column("Priority")

    for rank, task in enumerate(result.tasks, start=1):
        table.add_row(
            str(rank),
            str(task.issue_number),
            truncate_text(task.title, TABLE_CONFIG['title_max_length']),
            f"{task.score:.1f}",
            task.category.value,
            _priority(task.priority.value),
        )
    return table


def create_metrics_table(metrics: PerformanceMetrics, trend: TrendAnalysis) -> Table:
    table = _table("Performance Metrics")
    table.add_column("Metric", style="label")
    table.add_column("Value", justify="right", style="value")

    table.add_row("Average resolution time", f"{metrics.average_resolution_time:.1f} h")
    table.add_row("Median resolution time", f"{metrics.median_resolution_time:.1f} h")
    table.add_row("Resolution rate", f"{metrics.resolution_rate:.1f}%")
    table.add_row("Throughput", f"{metrics.throughput:.2f} / day")
    table.add_row("Backlog size", str(metrics.backlog_size))

    trend_style = TREND_STYLES.get(trend.direction.value, "value")
    table.add_row(
        "New issue trend",
        f"[{trend_style}]{trend.direction.value}[/] (R² {trend.r_squared:.2f})",
    )
    table.add_row("Predicted next day", f"{trend.prediction.next_period:.1f}")
    return table


def create_insights_table(insights: IssueInsights) -> Table:
    table = _table("Insights")
    table.add_column("Kind", style="label")
    table.add_column("Detail", style="value")

    sections = (
        ("Finding", insights.key_findings),
        ("Risk", insights.risk_factors),
        ("Opportunity", insights.opportunities),
        ("Recommendation", insights.recommendations),
    )
    for kind, entries in sections:
        for entry in entries:
            table.add_row(kind, entry)
    return table


def create_rules_table(config: ClassificationConfig) -> Table:
    table = _table(f"Classification Rules (v{config.version})")
    table.add_column("ID", style="accent")
    table.add_column("Name", style="value")
    table.add_column("Category")
    table.add_column("Weight", justify="right")
    table.add_column("Enabled", justify="center")

    for rule in config.rules:
        table.add_row(
            rule.id,
            rule.name,
            rule.category.value,
            f"{rule.weight:.2f}",
            "[success]yes[/]" if rule.enabled else "[muted]no[/]",
        )
    return table

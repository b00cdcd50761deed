"""Command line interface for the issue insights toolkit."""

from __future__ import annotations

import json
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional

import typer
from rich.logging import RichHandler

from .analytics import AnalyticsEngine
from .classification import IssueClassifier, TaskScorer
from .config import (
    ConfigLoader,
    default_classification_config,
    dump_config,
    load_classification_config,
)
from .console import Console
from .constants import (
    DEFAULT_TOP_TASKS,
    ERROR_MESSAGES,
    METRICS_WINDOWS,
    SUCCESS_MESSAGES,
)
from .display import (
    create_classification_table,
    create_insights_table,
    create_metrics_table,
    create_rules_table,
    create_top_tasks_table,
)
from .exceptions import (
    AnalysisError,
    ClassificationError,
    ConfigurationError,
    InvalidInputError,
)
from .models import IssueRecord

app = typer.Typer(help="Classify GitHub issues and analyze issue trends.")
rules_app = typer.Typer(help="Inspect and export classification rules")
app.add_typer(rules_app, name="rules")

console = Console()
logger = logging.getLogger(__name__)

RULES_OPTION_HELP = "Rule file (.toml, .yaml or .json); defaults to the user rule file or built-in rules"


def load_issues(path: Path) -> List[IssueRecord]:
    """Read a JSON array of GitHub issue objects.

    Raises:
        InvalidInputError: If the file is unreadable or not a list of objects
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise InvalidInputError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"{path} is not valid JSON: {exc}") from exc

    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise InvalidInputError(f"{path} must contain a JSON array of issue objects")

    return [IssueRecord.from_dict(item) for item in payload]


def _emit_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print core errors with the console error style and exit with code 1."""
    try:
        yield
    except ConfigurationError as exc:
        console.print_error(f"{ERROR_MESSAGES['config_invalid']} {exc}")
        raise typer.Exit(code=1) from exc
    except InvalidInputError as exc:
        console.print_error(f"{ERROR_MESSAGES['input_invalid']} {exc}")
        raise typer.Exit(code=1) from exc
    except ClassificationError as exc:
        console.print_error(f"{ERROR_MESSAGES['classification_failed']} {exc}")
        raise typer.Exit(code=1) from exc
    except AnalysisError as exc:
        console.print_error(f"{ERROR_MESSAGES['analysis_failed']} {exc}")
        raise typer.Exit(code=1) from exc


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output for debugging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-essential output",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """CLI entry-point callback for shared initialisation."""
    console.set_verbose(verbose)
    console.set_quiet(quiet)

    if no_color:
        os.environ["NO_COLOR"] = "1"
        console.no_color = True

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def classify(
    issues_file: Path = typer.Argument(..., help="JSON file with an array of GitHub issues"),
    rules: Optional[Path] = typer.Option(None, "--rules", "-r", help=RULES_OPTION_HELP),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Classify every issue in ISSUES_FILE."""
    with handle_errors():
        records = load_issues(issues_file)
        classifier = IssueClassifier(load_classification_config(rules))
        batch = classifier.classify_batch(records)

    if as_json:
        _emit_json(batch.to_dict())
        return

    titles = {record.number: record.title or "" for record in records}
    console.print(create_classification_table(batch.results, titles))
    console.print(
        f"[label]Classified[/] [value]{batch.processed_issues}/{batch.total_issues}[/] "
        f"[label]issues, average confidence[/] [value]{batch.average_confidence:.2f}[/]"
    )
    for error in batch.errors:
        console.print_warning(f"#{error.issue_number}: {error.error}")


@app.command(name="top-tasks")
def top_tasks(
    issues_file: Path = typer.Argument(..., help="JSON file with an array of GitHub issues"),
    rules: Optional[Path] = typer.Option(None, "--rules", "-r", help=RULES_OPTION_HELP),
    limit: int = typer.Option(DEFAULT_TOP_TASKS, "--limit", "-n", min=1, help="Number of tasks to show"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Recommend the open issues most worth working on next."""
    with handle_errors():
        records = load_issues(issues_file)
        scorer = TaskScorer(IssueClassifier(load_classification_config(rules)))
        result = scorer.get_top_tasks(records, limit=limit)

    if as_json:
        _emit_json(result.to_dict())
        return

    console.print(create_top_tasks_table(result))
    console.print(f"[label]Average score[/] [value]{result.average_score:.1f}[/]")


@app.command()
def analyze(
    issues_file: Path = typer.Argument(..., help="JSON file with an array of GitHub issues"),
    rules: Optional[Path] = typer.Option(None, "--rules", "-r", help=RULES_OPTION_HELP),
    window: int = typer.Option(
        METRICS_WINDOWS['default_time_series_days'],
        "--window",
        "-w",
        help="Days of issue creation history used for the trend",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Report performance metrics, the new-issue trend and insights."""
    engine = AnalyticsEngine()

    with handle_errors():
        records = load_issues(issues_file)
        classifier = IssueClassifier(load_classification_config(rules))
        batch = classifier.classify_batch(records)
        metrics = engine.calculate_performance_metrics(records)
        series = engine.generate_time_series(records, window)
        trend = engine.analyze_trends(series)
        insights = engine.generate_insights(records, batch.results)

    if as_json:
        _emit_json(
            {
                "metrics": metrics.to_dict(),
                "trend": trend.to_dict(),
                "insights": insights.to_dict(),
                "classification": engine.generate_classification_metrics(batch.results).to_dict(),
            }
        )
        return

    console.print(f"[title]{insights.summary}[/]")
    console.print(create_metrics_table(metrics, trend))
    console.print(create_insights_table(insights))


@rules_app.command("show")
def rules_show(
    rules: Optional[Path] = typer.Option(None, "--rules", "-r", help=RULES_OPTION_HELP),
) -> None:
    """Display the active classification rules."""
    with handle_errors():
        config = load_classification_config(rules)

    console.print(create_rules_table(config))
    console.print(
        f"[label]min_confidence[/] [value]{config.min_confidence}[/]  "
        f"[label]max_categories[/] [value]{config.max_categories}[/]"
    )


@rules_app.command("validate")
def rules_validate(
    path: Path = typer.Argument(..., help="Rule file to validate"),
) -> None:
    """Check a rule file against the rule schema."""
    is_valid, errors = ConfigLoader(path).validate_config()
    if not is_valid:
        for error in errors:
            console.print_error(f"{ERROR_MESSAGES['config_invalid']} {error}")
        raise typer.Exit(code=1)

    console.print_success(SUCCESS_MESSAGES['rules_valid'].format(path=path))


@rules_app.command("export")
def rules_export(
    path: Path = typer.Argument(..., help="Destination TOML file"),
) -> None:
    """Write the built-in rules to a TOML file for editing."""
    dump_config(default_classification_config(), path)
    console.print_success(SUCCESS_MESSAGES['rules_exported'].format(path=path))


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()

#!/usr/bin/env python3
"""
Rich UI components for CLI - consistent interface across all commands.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from liveeventops.helpers.dto.health_dto import FleetSummary, HealthAssessment
    from liveeventops.helpers.dto.secrets_dto import SecretInfo

console = Console()

# Color scheme constants
COLOR_SUCCESS = "green"
COLOR_ERROR = "red"
COLOR_WARNING = "yellow"
COLOR_INFO = "cyan"

CATEGORY_COLORS = {
    "healthy": COLOR_SUCCESS,
    "degraded": COLOR_WARNING,
    "unhealthy": COLOR_ERROR,
    "lookup_failed": COLOR_ERROR,
}


class InfoPanel:
    """
    Simple panel for displaying status/info without progress tracking.
    """

    @staticmethod
    def show(title: str, content: str, border_style: str = COLOR_INFO):
        """Show a single info panel."""
        panel = Panel(content, title=f"[bold]{title}[/bold]", border_style=border_style, box=box.ROUNDED)
        console.print(panel)


class TableDisplay:
    """
    Formatted tables for fleet results and secrets.
    """

    @staticmethod
    def show_fleet(summary: FleetSummary):
        """Display one row per VM, ordered by name."""
        table = Table(
            title=f"VM Health - {summary.resource_group}",
            box=box.ROUNDED,
            show_header=True,
            header_style="bold",
        )
        table.add_column("VM", style=COLOR_INFO)
        table.add_column("Score", justify="right", width=7)
        table.add_column("Status", width=14)
        table.add_column("Issues", overflow="fold")

        rows: list[tuple[str, str, str, str]] = []
        for a in summary.assessments:
            rows.append((a.target, str(a.score), a.category, "; ".join(a.issues)))
        for f in summary.lookup_failures:
            rows.append((f.target, "-", "lookup_failed", f.error))

        for name, score, status, issues in sorted(rows):
            color = CATEGORY_COLORS.get(status, "white")
            table.add_row(name, score, f"[{color}]{status}[/{color}]", issues)

        console.print(table)

    @staticmethod
    def show_secrets(vault_name: str, secrets: list[SecretInfo]):
        table = Table(title=f"Secrets - {vault_name}", box=box.ROUNDED, show_header=True, header_style="bold")
        table.add_column("Name", style=COLOR_INFO)
        table.add_column("Created")
        table.add_column("Updated")
        for s in secrets:
            table.add_row(s.name, s.created or "", s.updated or "")
        console.print(table)


def format_assessment(assessment: HealthAssessment) -> str:
    color = CATEGORY_COLORS.get(assessment.category, "white")
    lines = [
        f"[bold]VM:[/bold] {assessment.target}",
        f"[bold]Health Score:[/bold] {assessment.score}/100",
        f"[bold]Status:[/bold] [{color}]{assessment.category}[/{color}]",
    ]
    if assessment.issues:
        lines.append("")
        lines.append("[bold]Issues:[/bold]")
        lines += [f"  • {issue}" for issue in assessment.issues]
    return "\n".join(lines)


def print_success(message: str):
    """Print a success message."""
    console.print(f"[bold {COLOR_SUCCESS}]✓[/bold {COLOR_SUCCESS}] {message}")


def print_error(message: str):
    """Print an error message."""
    console.print(f"[bold {COLOR_ERROR}]✗[/bold {COLOR_ERROR}] {message}")


def print_warning(message: str):
    """Print a warning message."""
    console.print(f"[bold {COLOR_WARNING}]⚠[/bold {COLOR_WARNING}] {message}")


def print_info(message: str):
    """Print an info message."""
    console.print(f"[{COLOR_INFO}][i][/{COLOR_INFO}] {message}")

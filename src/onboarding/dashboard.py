"""
Console rendering for onboarding plans and classifications.

Renders:
- Plan summary with task counts
- Per-agent outcome table
- Timeline grouped by bucket
- Classification preview

Uses Rich library for terminal output.
"""

from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .agents.orchestrator import OnboardingPlan
from .classifier import ClassificationResult, RiskLevel


class PlanDashboard:
    """Renders an OnboardingPlan as summary, agent and timeline panels."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, plan: OnboardingPlan):
        self.console.print(
            Panel(
                self._render_summary(plan),
                title=f"Onboarding: {plan.summary.employee_name}",
                border_style="red" if plan.summary.degraded else "bold blue"
            )
        )
        self.console.print(
            Panel(self._render_agents(plan), title="Agents", border_style="cyan")
        )
        self.console.print(
            Panel(self._render_timeline(plan), title="Timeline", border_style="magenta")
        )

    def _render_summary(self, plan: OnboardingPlan) -> Table:
        summary = plan.summary
        employee = plan.employee
        table = Table(show_header=False, box=None, padding=(0, 1))

        table.add_row("Department:", summary.department)
        table.add_row("Email:", employee.email or "-")
        table.add_row("Buddy:", employee.buddy.name if employee.buddy else "-")
        table.add_row()
        table.add_row("Total tasks:", str(summary.total_tasks))
        table.add_row("Completed:", Text(str(summary.completed), style="green"))
        table.add_row("In progress:", Text(str(summary.in_progress), style="yellow"))
        table.add_row("Pending:", Text(str(summary.pending), style="dim"))
        table.add_row("Time:", f"{summary.orchestration_time_ms}ms")

        return table

    def _render_agents(self, plan: OnboardingPlan) -> Table:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Agent", style="cyan")
        table.add_column("Status", justify="center")
        table.add_column("Actions", justify="right")
        table.add_column("Key events")

        for name, agent in plan.summary.agent_summaries.items():
            table.add_row(
                name,
                self._render_status_indicator(agent.status),
                str(agent.total_actions),
                "\n".join(agent.key_events) or "-"
            )

        return table

    def _render_timeline(self, plan: OnboardingPlan) -> Table:
        table = Table(show_header=True, header_style="bold")
        table.add_column("When", style="magenta")
        table.add_column("Task")
        table.add_column("Category", style="dim")
        table.add_column("Status", justify="center")

        for bucket, entries in plan.timeline.items():
            for index, entry in enumerate(entries):
                table.add_row(
                    bucket if index == 0 else "",
                    entry.title,
                    entry.category,
                    Text(entry.status, style=self._get_task_status_style(entry.status))
                )

        return table

    @staticmethod
    def _render_status_indicator(status: str) -> Text:
        if status == "error":
            return Text("✗ error", style="red bold")
        return Text("● ok", style="green")

    @staticmethod
    def _get_task_status_style(status: str) -> str:
        return {
            "completed": "green",
            "in_progress": "yellow",
            "pending": "white"
        }.get(status, "white")


def _get_risk_style(risk_level: RiskLevel) -> str:
    return {
        RiskLevel.LOW: "green",
        RiskLevel.MEDIUM: "yellow bold",
        RiskLevel.HIGH: "red bold"
    }[risk_level]


def render_plan(plan: OnboardingPlan, console: Optional[Console] = None):
    """Print an onboarding plan to the console."""
    PlanDashboard(console).render(plan)


def render_classification(result: ClassificationResult, console: Optional[Console] = None):
    """Print a classification preview to the console."""
    console = console or Console()

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_row("Tier:", Text(result.tier.value, style="bold cyan"))
    table.add_row(
        "Risk:",
        Text(f"{result.risk_level.value} (score {result.risk_score})", style=_get_risk_style(result.risk_level))
    )
    table.add_row("Intensity:", "█" * result.onboarding_intensity + "░" * (5 - result.onboarding_intensity))
    table.add_row("Estimated days:", str(result.estimated_completion_days))
    table.add_row("Confidence:", f"{result.confidence}%")

    focus = Text()
    for area in result.focus_areas:
        focus.append(f"• {area}\n")

    console.print(
        Panel(
            Group(table, Text(), Text("Focus areas", style="bold"), focus),
            title=f"Classification (model {result.model_version})",
            border_style="bold blue"
        )
    )

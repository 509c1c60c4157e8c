"""
Run metrics for onboarding agents.

Tracks per-run duration, outcome and task output for each agent, with
aggregate statistics per agent across onboarding runs.
"""

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class AgentRunMetrics:
    """Metrics for a single agent run."""
    agent: str
    start_time: float
    end_time: Optional[float] = None
    duration_seconds: Optional[float] = None
    success: bool = False
    error_type: Optional[str] = None
    tasks_created: int = 0

    def finalize(self, success: bool, end_time: Optional[float] = None, error_type: Optional[str] = None):
        """Mark run as complete and calculate duration."""
        self.end_time = end_time if end_time is not None else time.time()
        self.duration_seconds = self.end_time - self.start_time
        self.success = success
        self.error_type = error_type

    @property
    def duration_ms(self) -> int:
        return int(round((self.duration_seconds or 0.0) * 1000))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agent": self.agent,
            "start_time": datetime.fromtimestamp(self.start_time).isoformat(),
            "end_time": datetime.fromtimestamp(self.end_time).isoformat() if self.end_time else None,
            "duration_seconds": self.duration_seconds,
            "success": self.success,
            "error_type": self.error_type,
            "tasks_created": self.tasks_created,
        }


@dataclass
class AgentMetrics:
    """Aggregate metrics for an agent."""
    agent: str
    total_runs: int = 0
    successful_runs: int = 0
    failed_runs: int = 0
    total_tasks_created: int = 0
    total_duration_seconds: float = 0.0
    avg_duration_seconds: float = 0.0
    max_duration_seconds: Optional[float] = None

    def update(self, run: AgentRunMetrics):
        """Update aggregate metrics with a finished run."""
        self.total_runs += 1
        if run.success:
            self.successful_runs += 1
        else:
            self.failed_runs += 1
        self.total_tasks_created += run.tasks_created

        if run.duration_seconds is not None:
            self.total_duration_seconds += run.duration_seconds
            self.avg_duration_seconds = self.total_duration_seconds / self.total_runs
            if self.max_duration_seconds is None or run.duration_seconds > self.max_duration_seconds:
                self.max_duration_seconds = run.duration_seconds

    def get_success_rate(self) -> float:
        """Success rate as percentage."""
        if self.total_runs == 0:
            return 0.0
        return (self.successful_runs / self.total_runs) * 100.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "agent": self.agent,
            "total_runs": self.total_runs,
            "successful_runs": self.successful_runs,
            "failed_runs": self.failed_runs,
            "success_rate": self.get_success_rate(),
            "total_tasks_created": self.total_tasks_created,
            "total_duration_seconds": self.total_duration_seconds,
            "avg_duration_seconds": self.avg_duration_seconds,
            "max_duration_seconds": self.max_duration_seconds,
        }


class MetricsCollector:
    """
    Metrics collection for agent runs.

    Keeps the most recent runs and aggregate statistics per agent.
    """

    def __init__(self, max_history: int = 1000):
        self.max_history = max_history
        self.runs: List[AgentRunMetrics] = []
        self.agent_metrics: Dict[str, AgentMetrics] = {}

    def record_run(
        self,
        agent: str,
        start_time: float,
        end_time: Optional[float],
        success: bool,
        error_type: Optional[str] = None,
        tasks_created: int = 0
    ) -> AgentRunMetrics:
        """
        Record a finished agent run and update aggregates.

        Args:
            agent: Agent key (hr, it, training, buddy)
            start_time: Epoch seconds the run started
            end_time: Epoch seconds the run settled
            success: Whether the run completed
            error_type: Exception class name if it failed
            tasks_created: Number of tasks the run contributed

        Returns:
            AgentRunMetrics for the run
        """
        run = AgentRunMetrics(agent=agent, start_time=start_time, tasks_created=tasks_created)
        run.finalize(success, end_time=end_time, error_type=error_type)

        self.runs.append(run)
        if len(self.runs) > self.max_history:
            self.runs = self.runs[-self.max_history:]

        if agent not in self.agent_metrics:
            self.agent_metrics[agent] = AgentMetrics(agent=agent)
        self.agent_metrics[agent].update(run)

        return run

    def get_agent_metrics(self, agent: str) -> Optional[AgentMetrics]:
        """Get aggregate metrics for an agent."""
        return self.agent_metrics.get(agent)

    def get_all_agent_metrics(self) -> Dict[str, AgentMetrics]:
        """Get metrics for all agents."""
        return dict(self.agent_metrics)


# Global metrics collector instance
_global_metrics_collector: Optional[MetricsCollector] = None


def get_metrics_collector() -> MetricsCollector:
    """Get or create global metrics collector."""
    global _global_metrics_collector
    if _global_metrics_collector is None:
        _global_metrics_collector = MetricsCollector()
    return _global_metrics_collector

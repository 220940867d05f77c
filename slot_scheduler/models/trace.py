"""Decision trace models for observability."""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Dict, List, Optional, Any


@dataclass
class SchedulingDecision:
    """Records the outcome of placing a single task."""
    
    task_id: str
    scheduled_start: Optional[datetime]
    scheduled_end: Optional[datetime]
    reason: str
    constraint_applied: Optional[str] = None
    
    @property
    def committed(self) -> bool:
        return self.scheduled_start is not None


@dataclass
class DecisionTrace:
    """Complete trace of a scheduling run."""
    
    run_id: str
    timestamp: datetime
    horizon_start: datetime
    horizon_end: datetime
    config: Dict[str, Any]
    decisions: List[SchedulingDecision]
    summary_stats: Dict[str, Any]
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert trace to dictionary for JSON export."""
        return asdict(self)
    
    def to_human_readable(self) -> str:
        """Generate human-readable log format."""
        lines = [
            f"=== Scheduling Run: {self.run_id} ===",
            f"Timestamp: {self.timestamp}",
            f"Horizon: {self.horizon_start} -> {self.horizon_end}",
            "",
            "Configuration:",
        ]
        
        for key, value in self.config.items():
            lines.append(f"  {key}: {value}")
        
        lines.extend([
            "",
            "Scheduling Decisions:",
        ])
        
        for decision in self.decisions:
            if decision.committed:
                lines.append(
                    f"  {decision.task_id} -> {decision.scheduled_start:%Y-%m-%d %H:%M}"
                    f" - {decision.scheduled_end:%H:%M}"
                )
            else:
                lines.append(f"  {decision.task_id} -> unscheduled")
            lines.append(f"    Reason: {decision.reason}")
            if decision.constraint_applied:
                lines.append(f"    Constraint: {decision.constraint_applied}")
        
        lines.extend([
            "",
            "Summary Statistics:",
        ])
        
        for key, value in self.summary_stats.items():
            lines.append(f"  {key}: {value}")
        
        lines.append("=" * 50)
        
        return "\n".join(lines)

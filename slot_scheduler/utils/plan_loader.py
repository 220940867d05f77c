"""Plan file loading."""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from ..exceptions import ValidationError, require_list, require_mapping
from ..models.schedule import Schedule, ScheduleOptions
from ..models.task import Task


def load_plan(plan_path: str) -> Tuple[List[Task], List[Schedule], ScheduleOptions]:
    """Load tasks, schedules and horizon from a YAML or JSON plan file."""
    path = Path(plan_path)
    
    if not path.exists():
        raise FileNotFoundError(f"Plan file not found: {plan_path}")
    
    with open(path, 'r') as f:
        try:
            if path.suffix.lower() in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            elif path.suffix.lower() == '.json':
                data = json.load(f)
            else:
                raise ValueError(f"Unsupported plan file format: {path.suffix}")
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ValidationError(f"Could not parse plan file {plan_path}: {exc}") from exc
    
    return parse_plan({} if data is None else data)


def parse_plan(data: Dict[str, Any]) -> Tuple[List[Task], List[Schedule], ScheduleOptions]:
    """Build model objects from already-decoded plan data."""
    require_mapping(data, "Plan")
    horizon = data.get('horizon')
    if not isinstance(horizon, dict):
        raise ValidationError("Plan requires a 'horizon' mapping with start_date and end_date")
    
    schedules = [Schedule.from_dict(entry) for entry in require_list(data.get('schedules'), "Plan schedules")]
    tasks = [Task.from_dict(entry) for entry in require_list(data.get('tasks'), "Plan tasks")]
    options = ScheduleOptions.from_dict(horizon)
    
    return tasks, schedules, options

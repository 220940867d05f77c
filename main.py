"""Main entry point for the weekly slot scheduler."""

import argparse
import json
import logging
import sys
from pathlib import Path

from slot_scheduler.engine.scheduler import Scheduler
from slot_scheduler.utils.config import get_default_config, load_config, setup_logging
from slot_scheduler.utils.plan_loader import load_plan

logger = logging.getLogger(__name__)


def run_scheduling(plan_path: str, config: dict, output_dir: str = None):
    """Schedule a plan file and save results and trace."""
    tasks, schedules, options = load_plan(plan_path)
    
    scheduler = Scheduler(config)
    results, trace = scheduler.schedule(tasks, schedules, options)
    
    # Output results
    summary = trace.summary_stats
    print(f"\nScheduling completed for {plan_path}")
    print(f"Scheduled {summary['tasks_scheduled']} of {summary['tasks_total']} tasks")
    for task in results:
        if task.is_scheduled:
            print(f"  {task.task_id}: {task.scheduled_start_date} -> {task.scheduled_end_date}")
        else:
            print(f"  {task.task_id}: unscheduled")
    
    results_dir = Path(output_dir or config.get('output', {}).get('results_dir', 'results'))
    results_dir.mkdir(parents=True, exist_ok=True)
    
    with open(results_dir / "scheduled_tasks.json", 'w') as f:
        json.dump([task.to_dict() for task in results], f, indent=2)
    
    # Save trace
    trace_path = results_dir / f"trace_{trace.run_id}.json"
    with open(trace_path, 'w') as f:
        json.dump(trace.to_dict(), f, indent=2, default=str)
    
    # Save human-readable log
    log_path = results_dir / f"trace_{trace.run_id}.log"
    with open(log_path, 'w') as f:
        f.write(trace.to_human_readable())
    
    print(f"\nTasks saved to: {results_dir / 'scheduled_tasks.json'}")
    print(f"Trace saved to: {trace_path}")
    print(f"Human-readable log saved to: {log_path}")
    
    return results, trace


def run_check(plan_path: str):
    """Validate a plan file without scheduling it."""
    tasks, schedules, options = load_plan(plan_path)
    
    known = {s.schedule_id for s in schedules}
    orphans = [t.task_id for t in tasks if t.schedule_id not in known]
    
    print(f"Plan {plan_path} is valid")
    print(f"  Horizon: {options.start_date} -> {options.end_date}")
    print(f"  Schedules: {len(schedules)}")
    print(f"  Tasks: {len(tasks)}")
    if orphans:
        print(f"  Tasks with unknown schedule: {', '.join(orphans)}")
    
    return tasks, schedules, options


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Weekly slot scheduler"
    )
    parser.add_argument(
        'command',
        choices=['schedule', 'check'],
        help='Command to run'
    )
    parser.add_argument(
        'plan',
        type=str,
        help='Path to plan file with horizon, schedules and tasks (YAML or JSON)'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to configuration file (default: built-in defaults)'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Directory for results (default: output.results_dir from config)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log every scheduling decision'
    )
    
    args = parser.parse_args(argv)
    
    try:
        config = load_config(args.config) if args.config else get_default_config()
        setup_logging(config, verbose=args.verbose)
        
        if args.command == 'schedule':
            run_scheduling(args.plan, config, args.output)
        elif args.command == 'check':
            run_check(args.plan)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    
    return 0


if __name__ == "__main__":
    sys.exit(main())

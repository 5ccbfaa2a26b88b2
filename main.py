"""Main entry point for the robot station scheduler."""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from models import SchedulingProblem, InvalidConfiguration, UnreachableTarget
from solvers import GreedyDispatchSolver
from evaluation import ScheduleAnalyzer, find_conflicts
from output_generator import generate_outputs
from report import ScheduleReport


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Single-robot dedicated station scheduler")
    ap.add_argument("--config", type=str, default="config/stations.json")
    ap.add_argument("--target-cycles", type=int, default=None,
                    help="Override the configured total cycle target.")
    ap.add_argument("--output-dir", type=str, default="output")
    ap.add_argument("--no-output", action="store_true", help="Do not write output files.")
    ap.add_argument("--timeline", type=int, default=20,
                    help="Number of robot operations to print in the timeline.")
    ap.add_argument("--quiet", action="store_true", help="Only print the conflict check.")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    """Main function to run the scheduler."""
    args = parse_args(argv)

    if not args.quiet:
        print("=" * 60)
        print("SINGLE-ROBOT STATION SCHEDULER")
        print("=" * 60)

    if not Path(args.config).exists():
        print(f"\nConfig file not found: {args.config}")
        return 2

    try:
        problem = SchedulingProblem.load_from_file(args.config, target_cycles=args.target_cycles)
        problem.validate()
    except (InvalidConfiguration, UnreachableTarget) as exc:
        print(f"\nInvalid configuration: {exc}")
        return 2

    if not args.quiet:
        print(f"\nProblem loaded from {args.config}:")
        for line in problem.summary_lines():
            print(line)

    solver = GreedyDispatchSolver(verbose=not args.quiet)
    if not args.quiet:
        print(f"\nSolver: {solver}")
        print("\nSolving...")
    schedule = solver.solve(problem)

    analyzer = ScheduleAnalyzer()
    analytics = analyzer.analyze(schedule)
    conflicts = find_conflicts(schedule)

    report = ScheduleReport(schedule, analytics=analytics, conflicts=conflicts)
    if args.quiet:
        report.print_conflicts()
    else:
        report.print_full_report(timeline_rows=args.timeline)

        print("\nEvaluation components:")
        for key, value in analyzer.get_components(schedule).items():
            print(f"  - {key}: {value:.4f}" if isinstance(value, float) else f"  - {key}: {value}")

    if not args.no_output:
        output_folder = generate_outputs(schedule, problem, args.config, output_base=args.output_dir,
                                         analytics=analytics, conflicts=conflicts,
                                         verbose=not args.quiet)
        if not args.quiet:
            print(f"\n" + "=" * 60)
            print(f"COMPLETED - Output folder: {output_folder}")
            print("=" * 60)

    return 1 if conflicts else 0


if __name__ == "__main__":
    sys.exit(main())

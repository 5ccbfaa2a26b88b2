"""Output generator for robot schedules - creates a run folder with CSV, JSON and text exports."""

import csv
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

sys.path.insert(0, str(Path(__file__).parent))

from models import SchedulingProblem
from timeline import Schedule
from evaluation import analyze, find_conflicts, format_time
from evaluation.analytics import ScheduleAnalytics


class OutputGenerator:
    """Generates output files for a schedule run."""

    def __init__(self, schedule: Schedule, problem: SchedulingProblem, config_file: str,
                 output_base: str = "output",
                 analytics: Optional[ScheduleAnalytics] = None,
                 conflicts: Optional[List[str]] = None,
                 verbose: bool = True):
        self.schedule = schedule
        self.problem = problem
        self.config_file = config_file
        self.output_base = Path(output_base)
        self.analytics = analytics if analytics is not None else analyze(schedule)
        self.conflicts = conflicts if conflicts is not None else find_conflicts(schedule)
        self.run_folder = None
        self.verbose = verbose

    def create_output_folder(self) -> Path:
        """Create output folder named after the config file and a timestamp."""
        config_name = Path(self.config_file).stem
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        # output/{config_name}_{timestamp}/
        self.run_folder = self.output_base / f"{config_name}_{timestamp}"
        self.run_folder.mkdir(parents=True, exist_ok=True)

        self._log(f"\nOutput folder created: {self.run_folder}")
        return self.run_folder

    def export_schedule_csv(self):
        """Export every task to CSV."""
        output_path = self.run_folder / "schedule.csv"
        self.schedule.to_dataframe().to_csv(output_path, index=False)
        self._log(f"Schedule CSV saved to: {output_path}")

    def export_station_idle_csv(self):
        """Export per-station idle statistics to CSV."""
        output_path = self.run_folder / "station_idle.csv"

        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(['Station Type', 'Station Index', 'Matched Cycles',
                             'Total Idle (s)', 'Avg Idle (s)', 'Max Idle (s)'])

            for (station_type, index), stats in self.analytics.station_idle.items():
                writer.writerow([
                    station_type,
                    index,
                    stats.matched_cycles,
                    stats.total,
                    f"{stats.average:.2f}",
                    stats.maximum
                ])

        self._log(f"Station idle CSV saved to: {output_path}")

    def export_cycle_counts_csv(self):
        """Export cycle counts per station type to CSV."""
        output_path = self.run_folder / "cycle_counts.csv"

        with open(output_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(['Station Type', 'Name', 'Stations', 'Cycles'])

            for station_type, count in self.analytics.cycle_counts.items():
                declared = self.schedule.get_type(station_type)
                writer.writerow([
                    station_type,
                    self.schedule.display_name(station_type),
                    declared.count if declared else 0,
                    count
                ])

        self._log(f"Cycle counts CSV saved to: {output_path}")

    def export_analytics_json(self):
        """Export the analytics summary and configuration to JSON."""
        output_path = self.run_folder / "analytics.json"
        payload = {
            "config": self.problem.to_dict(),
            "analytics": self.analytics.to_dict(),
            "conflict_count": len(self.conflicts),
        }
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2)

        self._log(f"Analytics JSON saved to: {output_path}")

    def export_conflicts(self):
        """Export conflict messages, one per line."""
        output_path = self.run_folder / "conflicts.txt"
        with open(output_path, 'w', encoding='utf-8') as f:
            for conflict in self.conflicts:
                f.write(conflict + "\n")

        self._log(f"Conflicts saved to: {output_path}")

    def export_schedule_summary(self):
        """Export overall schedule summary to text file."""
        output_path = self.run_folder / "schedule_summary.txt"
        a = self.analytics

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write("=" * 60 + "\n")
            f.write("ROBOT SCHEDULE SUMMARY\n")
            f.write("=" * 60 + "\n\n")

            f.write(f"Config file: {self.config_file}\n")
            f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")

            f.write("-" * 40 + "\n")
            f.write("CONFIGURATION\n")
            f.write("-" * 40 + "\n")
            for line in self.problem.summary_lines():
                f.write(line + "\n")
            f.write("\n")

            f.write("-" * 40 + "\n")
            f.write("SCHEDULE STATISTICS\n")
            f.write("-" * 40 + "\n")
            f.write(f"Total tasks: {len(self.schedule)}\n")
            f.write(f"Robot operations: {a.robot_operations}\n")
            f.write(f"Robot utilization: {a.robot_utilization * 100:.1f}%\n")
            f.write(f"Makespan: {format_time(a.makespan)} ({a.makespan}s)\n")
            f.write(f"Total station wait time: {a.total_idle_time}s\n")
            for station_type, count in a.cycle_counts.items():
                f.write(f"{self.schedule.display_name(station_type)} cycles: {count}\n")
            f.write(f"Conflicts: {len(self.conflicts)}\n\n")

            f.write("-" * 40 + "\n")
            f.write("OUTPUT FILES\n")
            f.write("-" * 40 + "\n")
            f.write("- schedule.csv: Every task of the timeline\n")
            f.write("- station_idle.csv: Idle time per station\n")
            f.write("- cycle_counts.csv: Cycles per station type\n")
            f.write("- analytics.json: Numeric summary\n")
            f.write("- conflicts.txt: Validator findings (empty when valid)\n")

        self._log(f"Schedule summary saved to: {output_path}")

    def _log(self, message: str):
        if self.verbose:
            print(message)

    def generate_all_outputs(self) -> Path:
        """Generate all output files."""
        self.create_output_folder()

        self.export_schedule_csv()
        self.export_station_idle_csv()
        self.export_cycle_counts_csv()
        self.export_analytics_json()
        self.export_conflicts()
        self.export_schedule_summary()

        self._log(f"\nAll outputs generated in: {self.run_folder}")
        return self.run_folder


def generate_outputs(schedule: Schedule, problem: SchedulingProblem, config_file: str,
                     output_base: str = "output",
                     analytics: Optional[ScheduleAnalytics] = None,
                     conflicts: Optional[List[str]] = None,
                     verbose: bool = True) -> Path:
    """
    Main function to generate all outputs for a schedule.

    Args:
        schedule: The produced schedule
        problem: The problem instance
        config_file: Path to the config file (names the run folder)
        output_base: Parent directory of run folders
        analytics: Precomputed analytics (computed when omitted)
        conflicts: Precomputed validator findings (computed when omitted)
        verbose: Print the folder and every written file

    Returns:
        Path to the output folder
    """
    generator = OutputGenerator(schedule, problem, config_file, output_base=output_base,
                                analytics=analytics, conflicts=conflicts, verbose=verbose)
    return generator.generate_all_outputs()

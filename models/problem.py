"""Scheduling problem model: station types plus the cycle target."""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .errors import InvalidConfiguration, UnreachableTarget
from .station import StationType

DEFAULT_TARGET_CYCLES = 152
INT_PATTERN = re.compile(r"^-?[0-9]+\Z")

# Accepted spellings for each station field, in lookup order
FIELD_ALIASES = {
    "count": ("count",),
    "wait_time": ("wait_time", "waitTime"),
    "load_time": ("load_time", "loadTime"),
    "unload_time": ("unload_time", "unloadTime"),
}


def _as_int(value: object, field_name: str, station_key: str) -> int:
    """Coerce a config value to int, rejecting fractions, booleans and blanks."""
    if isinstance(value, bool) or value is None:
        raise InvalidConfiguration(f"{station_key}: '{field_name}' must be an integer, got {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not INT_PATTERN.match(value):
            raise InvalidConfiguration(f"{station_key}: '{field_name}' must be an integer, got {value!r}")
        return int(value)
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        raise InvalidConfiguration(
            f"{station_key}: '{field_name}' must be an integer, got {value!r}"
        ) from None
    if pd.isna(as_float):
        raise InvalidConfiguration(f"{station_key}: '{field_name}' is missing")
    if not as_float.is_integer():
        raise InvalidConfiguration(f"{station_key}: '{field_name}' must be an integer, got {value!r}")
    return int(as_float)


def _lookup(entry: dict, field_name: str, station_key: str) -> object:
    for alias in FIELD_ALIASES[field_name]:
        if alias in entry:
            return entry[alias]
    raise InvalidConfiguration(f"{station_key}: missing field '{field_name}'")


@dataclass
class SchedulingProblem:
    """
    Encapsulates the whole scheduling instance.
    This is the input to any solver.

    Attributes:
        station_types: Station types in enumeration order (also the tie-break order)
        target_cycles: Total number of loads (initial + reloads) to reach before draining
    """
    station_types: List[StationType] = field(default_factory=list)
    target_cycles: int = DEFAULT_TARGET_CYCLES

    def num_stations(self) -> int:
        """Total number of physical station instances."""
        return sum(st.count for st in self.station_types)

    def get_station_type(self, key: str) -> Optional[StationType]:
        for station_type in self.station_types:
            if station_type.key == key:
                return station_type
        return None

    def validate(self) -> None:
        """
        Reject configurations the engine cannot run.

        Raises:
            InvalidConfiguration: negative counts or durations, duplicate keys, bad target
            UnreachableTarget: target lower than the number of initial loads
        """
        seen = set()
        for station_type in self.station_types:
            if not station_type.key:
                raise InvalidConfiguration("station type key must be a non-empty string")
            if station_type.key in seen:
                raise InvalidConfiguration(f"duplicate station type '{station_type.key}'")
            seen.add(station_type.key)

            for field_name in ("count", "wait_time", "load_time", "unload_time"):
                value = getattr(station_type, field_name)
                if isinstance(value, bool) or not isinstance(value, int):
                    raise InvalidConfiguration(
                        f"{station_type.key}: '{field_name}' must be an integer, got {value!r}"
                    )
                if value < 0:
                    raise InvalidConfiguration(
                        f"{station_type.key}: '{field_name}' must be >= 0, got {value}"
                    )

        if isinstance(self.target_cycles, bool) or not isinstance(self.target_cycles, int):
            raise InvalidConfiguration(f"target_cycles must be an integer, got {self.target_cycles!r}")
        if self.target_cycles < 0:
            raise InvalidConfiguration(f"target_cycles must be >= 0, got {self.target_cycles}")

        initial_loads = self.num_stations()
        if self.target_cycles < initial_loads:
            raise UnreachableTarget(
                f"target_cycles={self.target_cycles} is below the {initial_loads} initial loads"
            )

    @staticmethod
    def station_type_from_dict(entry: dict) -> StationType:
        """Build a StationType from one config entry (snake_case or camelCase keys)."""
        if not isinstance(entry, dict):
            raise InvalidConfiguration(f"station entry must be an object, got {entry!r}")
        key = entry.get("key", entry.get("type"))
        if key is None or (not isinstance(key, str)) or not key.strip():
            raise InvalidConfiguration(f"station entry without a 'key': {entry!r}")
        key = key.strip()
        name = entry.get("name") or key
        return StationType(
            key=key,
            name=str(name),
            count=_as_int(_lookup(entry, "count", key), "count", key),
            wait_time=_as_int(_lookup(entry, "wait_time", key), "wait_time", key),
            load_time=_as_int(_lookup(entry, "load_time", key), "load_time", key),
            unload_time=_as_int(_lookup(entry, "unload_time", key), "unload_time", key),
        )

    @classmethod
    def load_from_dict(cls, config: dict, base_dir: Optional[Path] = None) -> 'SchedulingProblem':
        """
        Create a problem from a config dict.

        Args:
            config: Dict with 'stations' (list of station entries) and 'target_cycles'.
                A 'stations_file' entry (CSV/XLSX) may replace the inline list.
            base_dir: Directory used to resolve a relative 'stations_file'

        Returns:
            SchedulingProblem instance (not yet validated)
        """
        if not isinstance(config, dict):
            raise InvalidConfiguration(f"config must be a JSON object, got {type(config).__name__}")
        raw_target = config.get("target_cycles", config.get("targetCycles", DEFAULT_TARGET_CYCLES))
        target_cycles = _as_int(raw_target, "target_cycles", "config")

        stations_file = config.get("stations_file")
        if stations_file is not None and not isinstance(stations_file, str):
            raise InvalidConfiguration(f"'stations_file' must be a path string, got {stations_file!r}")
        if stations_file:
            path = Path(stations_file)
            if base_dir is not None and not path.is_absolute():
                path = base_dir / path
            if not path.exists():
                raise InvalidConfiguration(f"stations file not found: {path}")
            if path.suffix.lower() in (".xlsx", ".xls"):
                df = pd.read_excel(path)
            else:
                df = pd.read_csv(path)
            return cls.load_from_dataframe(df, target_cycles)

        entries = config.get("stations")
        if entries is None:
            raise InvalidConfiguration("config has neither 'stations' nor 'stations_file'")
        if isinstance(entries, dict):
            # {"diskPack": {...}, "spacerTray": {...}} keeps insertion order
            for key, value in entries.items():
                if not isinstance(value, dict):
                    raise InvalidConfiguration(f"{key}: station entry must be an object, got {value!r}")
            entries = [dict(value, key=key) for key, value in entries.items()]
        elif not isinstance(entries, list):
            raise InvalidConfiguration(f"'stations' must be a list or an object, got {type(entries).__name__}")

        station_types = [cls.station_type_from_dict(entry) for entry in entries]
        return cls(station_types=station_types, target_cycles=target_cycles)

    @classmethod
    def load_from_dataframe(cls, df: pd.DataFrame, target_cycles: int = DEFAULT_TARGET_CYCLES) -> 'SchedulingProblem':
        """
        Create a problem from a station table, one row per station type.

        Args:
            df: DataFrame with columns key, count, wait_time, load_time, unload_time
                and an optional name column. Row order is the enumeration order.
            target_cycles: Total cycle target

        Returns:
            SchedulingProblem instance (not yet validated)
        """
        station_types = []
        for _, row in df.iterrows():
            entry = {col: row[col] for col in df.columns if pd.notna(row[col])}
            station_types.append(cls.station_type_from_dict(entry))
        return cls(station_types=station_types, target_cycles=target_cycles)

    @classmethod
    def load_from_file(cls, config_path: str, target_cycles: Optional[int] = None) -> 'SchedulingProblem':
        """
        Load a problem from a JSON config file.

        Args:
            config_path: Path to the JSON config
            target_cycles: Optional override of the configured target

        Returns:
            SchedulingProblem instance (not yet validated)
        """
        path = Path(config_path)
        with open(path, 'r', encoding='utf-8') as f:
            try:
                config = json.load(f)
            except json.JSONDecodeError as exc:
                raise InvalidConfiguration(f"{path}: invalid JSON ({exc})") from exc

        problem = cls.load_from_dict(config, base_dir=path.parent)
        if target_cycles is not None:
            problem.target_cycles = target_cycles
        return problem

    def summary_lines(self) -> List[str]:
        """Console-friendly description of the configuration."""
        lines = []
        for st in self.station_types:
            lines.append(f"  - {st.display_name}: {st.count} station(s), process {st.wait_time}s, "
                         f"load {st.load_time}s, unload {st.unload_time}s")
        lines.append(f"  - Target cycles: {self.target_cycles}")
        return lines

    def to_dict(self) -> Dict:
        return {
            "target_cycles": self.target_cycles,
            "stations": [
                {
                    "key": st.key,
                    "name": st.display_name,
                    "count": st.count,
                    "wait_time": st.wait_time,
                    "load_time": st.load_time,
                    "unload_time": st.unload_time,
                }
                for st in self.station_types
            ],
        }

    def __repr__(self) -> str:
        return (f"SchedulingProblem(types={len(self.station_types)}, "
                f"stations={self.num_stations()}, target_cycles={self.target_cycles})")

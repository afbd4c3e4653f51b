"""Shared data loading utilities for locale tables.

This module provides common data loading patterns with fallback search
across an explicit override directory and the package data directory.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

import pandas as pd


def find_data_file(
    module_file: str,
    subdirectory: str,
    filenames: List[str],
    override_dir: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """Find data file by searching standard locations.

    Search priority:
    1. Override directory: {override_dir}/{subdirectory}/ (if given)
    2. Module-local data: {module_dir}/data/{subdirectory}/

    Args:
        module_file: __file__ from the calling module (e.g., __file__)
        subdirectory: Subdirectory name (e.g., 'ru')
        filenames: List of candidate filenames to search for (e.g., ['months.csv'])
        override_dir: Optional directory searched before the package data

    Returns:
        Path to found file, or None if not found

    Examples:
        >>> # From locales/localeapi.py
        >>> path = find_data_file(__file__, 'ru', ['months.csv'])
    """
    candidates = []
    if override_dir is not None:
        candidates.append(Path(override_dir) / subdirectory)
    candidates.append(Path(module_file).parent / "data" / subdirectory)

    for data_dir in candidates:
        for filename in filenames:
            p = data_dir / filename
            if p.exists():
                return p

    return None


def load_csv_table(file_path: Path) -> pd.DataFrame:
    """Load a text table from CSV.

    All columns are read as strings and empty cells stay empty strings
    (a weekday called "NA" must not become NaN).

    Args:
        file_path: Path to CSV file

    Returns:
        Loaded DataFrame

    Raises:
        ValueError: If file extension is not .csv
    """
    if file_path.suffix != ".csv":
        raise ValueError(f"Unsupported file format: {file_path.suffix}. Use .csv")
    return pd.read_csv(file_path, dtype=str, keep_default_na=False, encoding="utf-8")


def load_yaml_file(path: Path) -> dict:
    """
    Load and parse YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Parsed YAML data as dictionary

    Raises:
        FileNotFoundError: If file does not exist

    Examples:
        >>> data = load_yaml_file(Path("locale.yaml"))
        >>> data['code']
        'ru'
    """
    import yaml

    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def format_not_found_error(
    subdirectory: str,
    searched_locations: List[Tuple[str, Path]],
    fix_instructions: List[str],
) -> str:
    """Format a helpful FileNotFoundError message.

    Args:
        subdirectory: Data subdirectory name (e.g., 'ru')
        searched_locations: List of (description, path) tuples for locations searched
        fix_instructions: List of commands/instructions to fix the issue

    Returns:
        Formatted error message string
    """
    lines = [f"No {subdirectory} data found in standard locations.\n"]

    lines.append("Searched:")
    for i, (desc, path) in enumerate(searched_locations, 1):
        lines.append(f"  {i}. {desc}: {path}")

    lines.append("\nTo fix:")
    for instruction in fix_instructions:
        lines.append(f"  • {instruction}")

    return "\n".join(lines)


__all__ = [
    "find_data_file",
    "load_csv_table",
    "load_yaml_file",
    "format_not_found_error",
]

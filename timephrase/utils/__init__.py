"""Shared utilities for timephrase package."""

from timephrase.utils.dataloader import (
    find_data_file,
    load_csv_table,
    load_yaml_file,
    format_not_found_error,
)

__all__ = [
    # Data loading
    "find_data_file",
    "load_csv_table",
    "load_yaml_file",
    "format_not_found_error",
]

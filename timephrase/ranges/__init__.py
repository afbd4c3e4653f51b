"""Ranges module: "с … по …" rendering of two instants.

Public API:
    render_range(start, end, unit_mask=None, ...) -> str
        Compact range, shared pieces written once

Examples:
    >>> from timephrase.ranges import render_range
    >>> render_range("2024-01-02", "2024-01-05", 56, now="2024-03-01")
    'со 2 по 5 января'
"""

from timephrase.ranges.rangeapi import PIECE_ORDER, render_range

__all__ = [
    "PIECE_ORDER",
    "render_range",
]

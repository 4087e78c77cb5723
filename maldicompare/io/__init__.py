"""File I/O utilities for reading spectra and writing results."""

from .readers import read_group, read_groups, read_spectrum, sniff_delimiter
from .writers import write_result

__all__ = [
    "read_spectrum",
    "read_group",
    "read_groups",
    "sniff_delimiter",
    "write_result",
]

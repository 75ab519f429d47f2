"""Utility modules for genomatrix."""

from genomatrix.utils.fileio import atomic_writer

__all__ = [
    # Atomic file-write utilities
    'atomic_writer',
]

"""MITL file output."""

from .sink import MITL_SUFFIX, ensure_mitl_suffix, write_mitl_file

__all__ = ["MITL_SUFFIX", "ensure_mitl_suffix", "write_mitl_file"]

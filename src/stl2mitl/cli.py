"""
Interactive entry point.

Reads an STL formula (one full line) and an output file name (first token of
the next non-blank line) from standard input, prints every pipeline stage
and writes the partitioned MITL formula to ``<name>.mitl``.
"""

from __future__ import annotations

import sys

from stl2mitl.core.pipeline import ConverterConfig, STLToMITLConverter


def _read_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def _read_token(prompt: str) -> str | None:
    """First whitespace-delimited token, skipping blank lines. ``None`` at EOF."""
    line = _read_line(prompt)
    while line is not None:
        tokens = line.split()
        if tokens:
            return tokens[0]
        line = _read_line("")
    return None


def main(config: ConverterConfig | None = None) -> int:
    """Run one interactive conversion. Returns the process exit code."""
    stl_formula = _read_line("Enter the STL formula: ") or ""

    converter = STLToMITLConverter(config)
    result = converter.convert(stl_formula)

    filename = _read_token("\nStep 7: Enter the filename to save the MITL formula (e.g., output): ")
    if filename is None:
        converter.report.error("No output file name given; MITL formula not written")
        return 0

    converter.write(result, filename)
    return 0


if __name__ == "__main__":
    sys.exit(main())

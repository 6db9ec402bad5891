"""Compile pipeline data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass

from . import constants


@dataclass(frozen=True)
class CompileConfig:
    """Groups output-shaping configuration."""

    entry_point: str = constants.DEFAULT_ENTRY_POINT
    indent_unit: str = constants.INDENT_UNIT

    @property
    def entry_point_open(self) -> str:
        return constants.ENTRY_POINT_OPEN_TEMPLATE.format(name=self.entry_point)

    @property
    def entry_point_close(self) -> str:
        return constants.ENTRY_POINT_CLOSE


@dataclass
class CompileStats:
    """Timing and size statistics for each pipeline stage."""

    source_bytes: int = 0
    source_lines: int = 0

    # Stage timings (seconds)
    parse_time: float = 0.0
    lower_time: float = 0.0
    flatten_time: float = 0.0
    total_time: float = 0.0

    # Output sizes
    statement_count: int = 0
    output_lines: int = 0

    def report(self) -> str:
        lines = [
            "═══ Compile Statistics ═══",
            f"  Source: {self.source_lines} lines, {self.source_bytes} bytes",
            "",
            f"  {'Stage':<20} {'Time':>10}  {'Output':>24}",
            f"  {'─' * 20} {'─' * 10}  {'─' * 24}",
        ]

        stages = [
            ("Parse", self.parse_time, f"{self.statement_count} statements"),
            ("Lower", self.lower_time, ""),
            ("Flatten", self.flatten_time, f"{self.output_lines} lines"),
        ]
        for name, t, output in stages:
            time_str = f"{t * 1000:>8.1f}ms"
            lines.append(f"  {name:<20} {time_str:>10}  {output:>24}")

        lines.append(f"  {'─' * 20} {'─' * 10}  {'─' * 24}")
        lines.append(f"  {'Total':<20} {self.total_time * 1000:>8.1f}ms")
        return "\n".join(lines)

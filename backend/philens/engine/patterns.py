"""Pattern taxonomy — the closed set of classes the engine can report.

Per-class static data lives in lookup tables keyed by every member; the
import-time check below fails loudly if a member is added without an entry.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, TypeVar


class PatternClass(str, enum.Enum):
    SPIRAL_FIBONACCI = "fibonacci_spiral"
    GOLDEN_RATIO = "golden_ratio"
    FIBONACCI_SEQUENCE = "fibonacci_sequence"
    PHI_GRID = "phi_grid"
    SUNFLOWER_SPIRAL = "sunflower_spiral"
    PINECONE_SPIRAL = "pinecone_spiral"
    SHELL_SPIRAL = "shell_spiral"
    NAUTILUS_SPIRAL = "nautilus_spiral"
    LEAF_ARRANGEMENT = "leaf_arrangement"

    @property
    def display_name(self) -> str:
        return PATTERN_METADATA[self].display_name

    @property
    def default_weight(self) -> float:
        return PATTERN_METADATA[self].default_weight


@dataclass(frozen=True)
class PatternMetadata:
    display_name: str
    default_weight: float


_V = TypeVar("_V")


def exhaustive(table: dict[PatternClass, _V], name: str) -> Mapping[PatternClass, _V]:
    """Freeze a per-class table after checking it covers every PatternClass."""
    missing = set(PatternClass) - set(table)
    if missing:
        names = ", ".join(sorted(m.name for m in missing))
        raise ValueError(f"{name} is missing entries for: {names}")
    return MappingProxyType(dict(table))


PATTERN_METADATA: Mapping[PatternClass, PatternMetadata] = exhaustive(
    {
        PatternClass.SPIRAL_FIBONACCI: PatternMetadata("Fibonacci Spiral", 0.85),
        PatternClass.GOLDEN_RATIO: PatternMetadata("Golden Ratio", 0.80),
        PatternClass.FIBONACCI_SEQUENCE: PatternMetadata("Fibonacci Sequence", 0.75),
        PatternClass.PHI_GRID: PatternMetadata("Phi Grid", 0.70),
        PatternClass.SUNFLOWER_SPIRAL: PatternMetadata("Sunflower Spiral", 0.90),
        PatternClass.PINECONE_SPIRAL: PatternMetadata("Pinecone Spiral", 0.88),
        PatternClass.SHELL_SPIRAL: PatternMetadata("Shell Spiral", 0.82),
        PatternClass.NAUTILUS_SPIRAL: PatternMetadata("Nautilus Spiral", 0.95),
        PatternClass.LEAF_ARRANGEMENT: PatternMetadata("Leaf Arrangement", 0.78),
    },
    "PATTERN_METADATA",
)

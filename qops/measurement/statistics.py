"""Aggregated measurement results."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .sampling import counts_to_probs


@dataclass
class MeasurementStatistics:
    """
    Outcome counts of a repeated measurement.

    Attributes
    ----------
    counts:
        ``{label: count}``; labels put the last measured qubit first.
    shots:
        Total number of shots.
    qubits:
        The measured qubits, in the order given by the caller.
    """

    counts: Dict[str, int]
    shots: int
    qubits: Tuple[int, ...] = field(default_factory=tuple)

    def probabilities(self) -> Dict[str, float]:
        """Relative frequency of each observed label."""
        if self.shots == 0:
            return {k: 0.0 for k in self.counts}
        return {k: v / self.shots for k, v in self.counts.items()}

    def probability(self, label: str) -> float:
        if self.shots == 0:
            return 0.0
        return self.counts.get(label, 0) / self.shots

    def most_frequent(self) -> Optional[Tuple[str, int]]:
        """The label with the highest count (lowest label on ties), or None."""
        if not self.counts:
            return None
        label = min(self.counts, key=lambda k: (-self.counts[k], k))
        return label, self.counts[label]

    def entropy(self) -> float:
        """Shannon entropy of the observed distribution, in bits."""
        return -sum(p * math.log2(p) for p in counts_to_probs(self.counts).values() if p > 0)

    def histogram(self, width: int = 40) -> str:
        """
        Text histogram, one line per label in label order::

            00: ████████████████████ 50.00% (500)
        """
        if not self.counts:
            return ""
        max_count = max(self.counts.values()) or 1
        lines = []
        for label in sorted(self.counts):
            count = self.counts[label]
            bar = "█" * int(count / max_count * width)
            prob = count / self.shots if self.shots else 0.0
            lines.append(f"{label}: {bar} {prob * 100:.2f}% ({count})")
        return "\n".join(lines)


__all__ = ["MeasurementStatistics"]

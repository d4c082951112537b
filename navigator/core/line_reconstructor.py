"""
Line Reconstruction Component.

Groups positioned text runs of one page into reading-order lines.
"""

from typing import Iterable, List

from core.constants import LINE_TOLERANCE
from core.models import GlyphRun


class LineReconstructor:
    """
    Rebuilds text lines from independently positioned glyph runs.

    PDF text carries no line grouping; runs whose baselines are within
    ``tolerance`` of the previous run are read as one line.
    """

    def __init__(self, tolerance: float = LINE_TOLERANCE):
        self.tolerance = tolerance

    def reconstruct(self, runs: Iterable[GlyphRun]) -> List[str]:
        """
        Build lines top to bottom.

        Args:
            runs: Glyph runs of one page, in any order

        Returns:
            Lines of text, top of page first
        """
        ordered = sorted(runs, key=lambda run: run.y, reverse=True)
        lines = []
        current: List[GlyphRun] = []
        last_y = None

        for run in ordered:
            if last_y is None or abs(run.y - last_y) < self.tolerance:
                current.append(run)
            else:
                self._flush(current, lines)
                current = [run]
            last_y = run.y

        self._flush(current, lines)
        return lines

    @staticmethod
    def _flush(current: List[GlyphRun], lines: List[str]) -> None:
        if not current:
            return
        parts = [run.text.strip() for run in sorted(current, key=lambda run: run.x)]
        line = ' '.join(part for part in parts if part).strip()
        if line:
            lines.append(line)

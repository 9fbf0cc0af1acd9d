# analyzer.py
import logging
import random
from dataclasses import dataclass, asdict

from models import Severity

logger = logging.getLogger(__name__)

DEFAULT_RECOMMENDATION = (
    "Based on the analysis, this crack requires monitoring. "
    "Consider professional inspection if it grows."
)


@dataclass
class CrackAnalysis:
    length_mm: float
    width_mm: float
    depth_mm: float
    severity: Severity
    recommendation: str
    confidence: float

    def to_dict(self):
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


class CrackAnalyzer:
    """Measures a crack in a stored image.

    Subclasses implement `analyze`; the returned CrackAnalysis must keep
    positive measurements, a Severity member, a non-empty recommendation
    and a confidence in [0, 1].
    """

    name = "base"

    def analyze(self, image_path: str) -> CrackAnalysis:
        raise NotImplementedError


class RandomCrackAnalyzer(CrackAnalyzer):
    """Placeholder detector: fabricates measurements without reading the image."""

    name = "random-stub"

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def analyze(self, image_path: str) -> CrackAnalysis:
        rng = self.rng
        result = CrackAnalysis(
            length_mm=round(rng.uniform(10, 110), 2),
            width_mm=round(rng.uniform(0.5, 5.5), 2),
            depth_mm=round(rng.uniform(2, 22), 2),
            severity=rng.choice(list(Severity)),
            recommendation=DEFAULT_RECOMMENDATION,
            confidence=round(rng.uniform(0.7, 1.0), 3),
        )
        logger.info(f"Stub analysis for {image_path}: {result.severity.value}, confidence={result.confidence}")
        return result


def get_analyzer() -> CrackAnalyzer:
    # one instance per request, nothing shared between uploads
    return RandomCrackAnalyzer()

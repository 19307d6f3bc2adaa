import math
from abc import ABC, abstractmethod
from collections.abc import Sequence


class ScoringModel(ABC):
    @abstractmethod
    def infer(self, ids: Sequence[int], mask: Sequence[int]) -> Sequence[float]:
        """Return one score per category, in category order."""
        pass


def argmax(scores: Sequence[float]) -> int:
    """
    Index of the first maximum, or -1 when no score is a real number.

    The running maximum starts at negative infinity so an all-negative score
    vector still selects its largest element.
    """
    best = -1
    best_score = -math.inf
    for index, score in enumerate(scores):
        if score > best_score:
            best_score = score
            best = index
    return best

"""
AttnViz Backend: Abstract Relevance Scorer Interface
=======================================================

What:  Abstract base class defining the contract for token relevance scoring.
Why:   The current scorer is a fixed placeholder. A model-backed scorer
       (e.g. real attention weights) must be able to replace it without
       touching the routes or VisualizationService. Strategy pattern.
How:   Concrete implementations inherit from RelevanceScorer and implement build().
Who:   Called by VisualizationService for POST /api/visualize.

Implementations:
    - UniformRelevanceScorer: deterministic placeholder (1.0 diagonal, 0.5 elsewhere)
"""

from abc import ABC, abstractmethod
from typing import List, Sequence


class RelevanceScorer(ABC):
    """
    Abstract interface for token-by-token relevance scoring.

    Contract:
        - build() accepts N tokens and returns an N×N matrix of floats
        - row i, column j holds the relevance of token j to token i
        - N == 0 yields an empty matrix, never an error
        - implementations must not mutate the token sequence
    """

    @abstractmethod
    def build(self, tokens: Sequence[str]) -> List[List[float]]:
        """
        Score every ordered pair of tokens.

        Args:
            tokens: Ordered token sequence produced by the tokenizer.

        Returns:
            List of N rows, each a list of N floats.
        """
        ...

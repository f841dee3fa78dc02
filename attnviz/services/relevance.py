"""
AttnViz Backend: Relevance Matrix Builder
===========================================

What:  Placeholder relevance scorer and the visualize workflow built on it.
Why:   The frontend renders a token-by-token heat map; until a trained model
       is wired in, the matrix follows a fixed, bit-reproducible rule.
How:   VisualizationService tokenizes the text and hands the tokens to an
       injected RelevanceScorer.
Who:   VisualizationService is constructed in create_app() and injected into
       the visualize route.

Placeholder rule (UniformRelevanceScorer):
    i == j  → 1.0   (a token is fully relevant to itself)
    i != j  → 0.5   (every other pair scores the same)

    "one two"  →  [[1.0, 0.5],
                   [0.5, 1.0]]
"""

import logging
from typing import List, Optional, Sequence

from attnviz.services.relevance_base import RelevanceScorer
from attnviz.services.tokenizer import tokenize

logger = logging.getLogger(__name__)


class UniformRelevanceScorer(RelevanceScorer):
    """Stand-in scorer: constant self-relevance on the diagonal, constant elsewhere."""

    SELF_SCORE = 1.0
    PEER_SCORE = 0.5

    def build(self, tokens: Sequence[str]) -> List[List[float]]:
        n = len(tokens)
        return [
            [self.SELF_SCORE if i == j else self.PEER_SCORE for j in range(n)]
            for i in range(n)
        ]


class VisualizationService:
    """
    Turns a text string into its relevance matrix.

    Stateless apart from the scorer, so a single instance is shared by all
    requests.
    """

    def __init__(self, scorer: Optional[RelevanceScorer] = None):
        self.scorer = scorer or UniformRelevanceScorer()

    def visualize(self, text: str) -> List[List[float]]:
        """
        Tokenize `text` and score every token pair.

        Returns:
            N×N matrix where N is the number of tokens; [] for empty or
            all-whitespace text.
        """
        tokens = tokenize(text)
        matrix = self.scorer.build(tokens)
        logger.debug(
            "Built %dx%d relevance matrix with %s",
            len(tokens),
            len(tokens),
            type(self.scorer).__name__,
        )
        return matrix

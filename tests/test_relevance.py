"""
AttnViz Backend: Relevance Matrix Tests
==========================================

What we test:
    ✅ placeholder rule: 1.0 on the diagonal, 0.5 elsewhere, exactly
    ✅ N = 0 gives an empty matrix
    ✅ VisualizationService composes tokenizer and scorer
    ✅ a different RelevanceScorer can be swapped in
"""

from typing import List, Sequence

import pytest

from attnviz.services.relevance import UniformRelevanceScorer, VisualizationService
from attnviz.services.relevance_base import RelevanceScorer
from attnviz.services.tokenizer import tokenize


class TestUniformRelevanceScorer:

    def setup_method(self):
        self.scorer = UniformRelevanceScorer()

    def test_three_tokens(self):
        matrix = self.scorer.build(tokenize("a b c"))

        assert matrix == [
            [1.0, 0.5, 0.5],
            [0.5, 1.0, 0.5],
            [0.5, 0.5, 1.0],
        ]

    def test_empty_tokens(self):
        assert self.scorer.build([]) == []

    def test_single_token(self):
        assert self.scorer.build(["solo"]) == [[1.0]]

    def test_square_and_float(self):
        matrix = self.scorer.build(["w"] * 7)

        assert len(matrix) == 7
        assert all(len(row) == 7 for row in matrix)
        assert all(isinstance(value, float) for row in matrix for value in row)

    def test_repeated_tokens_are_scored_by_position(self):
        """Identical tokens at different positions are still off-diagonal."""
        assert self.scorer.build(["the", "the"]) == [[1.0, 0.5], [0.5, 1.0]]

    def test_rows_are_independent_lists(self):
        matrix = self.scorer.build(["a", "b"])
        matrix[0][1] = 9.0
        assert matrix[1][0] == 0.5

    def test_abstract_scorer_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            RelevanceScorer()


class _PositionScorer(RelevanceScorer):
    def build(self, tokens: Sequence[str]) -> List[List[float]]:
        return [[float(i * 10 + j) for j in range(len(tokens))] for i in range(len(tokens))]


class TestVisualizationService:

    def test_default_scorer_is_placeholder(self):
        service = VisualizationService()
        assert isinstance(service.scorer, UniformRelevanceScorer)

    def test_visualize_two_tokens(self):
        assert VisualizationService().visualize("one two") == [[1.0, 0.5], [0.5, 1.0]]

    def test_visualize_blank_text(self):
        assert VisualizationService().visualize("  \n ") == []

    def test_custom_scorer_receives_tokens(self):
        service = VisualizationService(scorer=_PositionScorer())

        assert service.visualize("x  y") == [[0.0, 1.0], [10.0, 11.0]]

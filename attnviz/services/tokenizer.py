"""
AttnViz Backend: Whitespace Tokenizer
=======================================

What:  Splits raw text into an ordered list of whitespace-delimited tokens.
Who:   Called by VisualizationService before the relevance matrix is built.

str.split() with no separator splits on runs of any whitespace (space, tab,
newline and the other Unicode whitespace characters) and drops the empty
fragments at either end, so "" and "   " both yield [].
"""

from typing import List


def tokenize(text: str) -> List[str]:
    """Return the whitespace-delimited tokens of `text`, in order."""
    return text.split()

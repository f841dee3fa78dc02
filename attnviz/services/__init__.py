"""
AttnViz Backend: Services Layer
==================================

Service Inventory:
    - tokenize:               whitespace tokenizer
    - RelevanceScorer:        abstract token-pair scoring interface
    - UniformRelevanceScorer: placeholder scorer (1.0 diagonal, 0.5 elsewhere)
    - VisualizationService:   tokenize → score
    - TextStore:              validated persistence of text records
"""

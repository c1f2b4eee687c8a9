"""State/store layer.

This package holds the single current generation of normalized artifact
data and publishes a change event whenever a refresh replaces it.
"""

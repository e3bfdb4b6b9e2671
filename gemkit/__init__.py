"""Integer programming models and graph edit distance formulations."""

__version__ = "0.1.0"
"""Diff result types, analysis reports, selectors, text measures and change classifiers."""

__version__ = "0.1.0"
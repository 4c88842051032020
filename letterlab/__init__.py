"""Prompt building, completion orchestration and evaluation for document analysis."""

__version__ = "0.1.0"

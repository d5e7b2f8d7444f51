"""Core Python package for the trade evaluator."""

"""Prototype generation toolkit backed by a local LLM."""

__version__ = "0.1.0"

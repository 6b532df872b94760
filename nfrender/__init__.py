"""Colouring of Newton fractal computation results, render configs, and helpers for zoom and video tooling."""

__version__ = "0.6.2"
"""Command-line generator for React + Vite / Express project skeletons."""

__version__ = "0.1.0"

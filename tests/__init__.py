"""
Test suite for the exportdocs project.

Unit tests for the layout engine live under ``engine/``, tests for the
document assemblers under ``assemblers/``.
"""

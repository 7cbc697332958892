# src/togglecomment/__init__.py
"""togglecomment: toggle-style line commenting with column alignment."""

__version__ = "0.1.0"

"""
stargazed package

This package builds an awesome-list style README out of a user's GitHub stars.

Key responsibilities are split across modules:
- `options.py`: validate loosely-typed input (CLI flags / YAML config) into `Options`
- `github_client.py`: isolated GitHub REST API interactions (starred pages, README publishing)
- `aggregator.py`: group starred repositories by language and clean descriptions
- `renderer.py`: template loading, rendering and writing README.md
- `cli.py`: CLI entrypoint and orchestration (validate -> fetch -> group -> render -> write)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"

"""
gqlclient CLI package.
"""

from .main import main, run

__all__ = ["main", "run"]

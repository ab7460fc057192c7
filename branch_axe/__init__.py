"""
branch-axe - chop down local branches that were squash-merged on GitHub
"""

from .__version__ import __version__
from .core import BranchAxe
from .cli.main import main

__all__ = ["BranchAxe", "main", "__version__"]

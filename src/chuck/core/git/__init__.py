"""Git operations subpackage.

This subpackage provides abstractions over git operations with support for
testing via fakes.
"""

from chuck.core.git.abc import CherryPickOutcome, CherryPickResult, CommitRef, Git
from chuck.core.git.real import RealGit

__all__ = [
    "CherryPickOutcome",
    "CherryPickResult",
    "CommitRef",
    "Git",
    "RealGit",
]

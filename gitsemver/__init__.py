"""gitsemver: semantic versions derived from git history."""

__version__ = "0.1.0"

"""relbranch: trunk/release-branch version management on top of git."""

__version__ = "0.3.0"

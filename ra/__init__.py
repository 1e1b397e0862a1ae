"""Release automation: cut a version branch and record it in a config repo."""

__version__ = "0.1.0"

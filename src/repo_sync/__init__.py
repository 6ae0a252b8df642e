"""repo-sync: keep a local installation in step with its upstream repository."""

__version__ = "0.1.0"

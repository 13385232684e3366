"""Post a fixed comment on the issue or pull request that triggered a workflow."""

__version__ = "0.1.0"

"""tici: per-directory tmux session snapshots."""

__version__ = "0.1.0"

"""Settings persistence for the Alfred Todoist workflow."""

__version__ = "5.9.0"

"""File-backed task manager: a JSON task store and its command-line front end."""

__version__ = "0.1.0"

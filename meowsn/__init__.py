"""Local SQLite storage and headless combo-box widgets for an MSN-style chat client."""

__version__ = "0.7.1"
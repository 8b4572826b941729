"""livedoc: attach notes to file+line locations and keep them in NOTES.md."""

__version__ = "0.1.0"

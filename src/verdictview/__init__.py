"""VerdictView - Defensive renderer for fact-check analysis results."""

__version__ = "0.1.0"

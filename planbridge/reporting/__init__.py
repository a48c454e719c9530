"""Consumer tree reporting: YAML report generation."""

from planbridge.reporting.reporter import Reporter

__all__ = ["Reporter"]

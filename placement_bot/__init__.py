"""JU Placement Bot — placement lookups against the Jimma University portal."""

__version__ = "1.0.0"

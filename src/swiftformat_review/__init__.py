"""Report SwiftFormat violations in a code change as a review comment."""

__version__ = "0.1.0"

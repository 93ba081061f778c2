"""StudentStay: student-housing reviews with company alias resolution and trust scoring."""

__version__ = "0.1.0"

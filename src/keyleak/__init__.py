"""keyleak — find hard-coded secrets with a declarative rule set."""

__version__ = "1.0.0"

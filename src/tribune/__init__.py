"""Tribune: community board for the tournament companion app."""

__version__ = "0.1.0"

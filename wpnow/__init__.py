"""wp-now — spin up a local WordPress around whatever directory you are in."""

__version__ = "0.1.0"

"""gamekit: a frame-driven entity loop for small pygame games."""

__version__ = "0.1.0"

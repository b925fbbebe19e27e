"""wrapgen: React wrapper generation for custom element components."""

__version__ = "0.1.0"

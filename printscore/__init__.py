"""PrintScore: print-suitability scoring for uploaded designs."""

__version__ = "0.3.0"

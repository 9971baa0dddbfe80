"""scorewave: render a musical score, described as parameter curves, into audio."""

__version__ = "0.1.0"

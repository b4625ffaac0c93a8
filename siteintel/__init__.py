"""Website intelligence: turn a business website into a structured profile."""

__version__ = "0.1.0"

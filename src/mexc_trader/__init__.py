"""MEXC futures single-shot trader."""

__version__ = "0.1.0"

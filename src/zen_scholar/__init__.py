"""Zen Scholar: a local study task tracker with an assistant panel."""

__version__ = "0.1.0"

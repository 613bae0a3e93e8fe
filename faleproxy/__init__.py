"""Fale Proxy — fetch a web page and rewrite a word in its visible text."""

__version__ = "1.0.0"

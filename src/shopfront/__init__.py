"""shopfront — controller composition for e-commerce frontend domains."""

__version__ = "0.3.0"

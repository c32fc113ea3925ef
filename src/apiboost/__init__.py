"""apiboost: generate request bindings from API descriptions."""

__version__ = "0.1.0"

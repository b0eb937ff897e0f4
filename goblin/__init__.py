"""Runtime core of a small embeddable scripting language: scopes, a tokenizer, statements and value helpers."""

__version__ = "0.1.0"

__all__ = ["compare", "control", "convert", "scanner", "scope", "statements", "text"]
"""gtbatch: batch text translation through the Google Translate web endpoints."""

__version__ = "0.3.0"

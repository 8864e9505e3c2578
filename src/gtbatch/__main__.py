"""Allow running as python -m gtbatch."""

from gtbatch.cli import app

app()

"""modsquad - batch export tracker modules to audio files."""

__version__ = "0.1.0"

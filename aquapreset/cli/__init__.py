"""Command line interface for AquaPreset."""

from .main import main

__all__ = ['main']

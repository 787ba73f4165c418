"""Utility modules for AquaPreset."""

"""Automated quality control of generated content."""

from crisis_profiles.quality.controller import QualityController

__all__ = [
    "QualityController",
]

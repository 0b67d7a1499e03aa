"""
Orchestration module for GA Hull.

Runs drawings through the full pipeline.
"""

from gahull.orchestration.pipeline import GAPipeline, write_outputs

__all__ = [
    "GAPipeline",
    "write_outputs",
]

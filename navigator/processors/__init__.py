"""
High-level orchestrators for TOC discovery.
"""

from .toc_processor import TocExtractionOrchestrator, StrategyOutcome, StrategyStatus

__all__ = [
    'TocExtractionOrchestrator',
    'StrategyOutcome',
    'StrategyStatus',
]

"""
Core components of the TOC pipeline.

Each component handles one step: line reconstruction, TOC line parsing,
hierarchy inference, printed page resolution and outline adaptation.
"""

from .line_reconstructor import LineReconstructor
from .toc_parser import TocLineParser
from .hierarchy import TocHierarchyBuilder
from .page_resolver import PageNumberResolver
from .outline_adapter import OutlineAdapter

__all__ = [
    'LineReconstructor',
    'TocLineParser',
    'TocHierarchyBuilder',
    'PageNumberResolver',
    'OutlineAdapter',
]

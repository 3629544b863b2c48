"""Reference document parsing, indexing and lookup.

Components:
    - parse_sections / SectionParser: Split markdown into titled sections
    - build_index / SectionIndex: Immutable keyword index
    - QueryService: lookup and list_all over an index
    - DocumentLoader: Read, parse and index a document with caching
    - SectionFormatter: Render sections as text or markdown

Data Models:
    - Section, CodeBlock, TextBlock
"""

from refindex.knowledge.formatter import SectionFormatter
from refindex.knowledge.index import SectionIndex, build_index
from refindex.knowledge.loader import DocumentLoader, load_index
from refindex.knowledge.models import CodeBlock, Section, TextBlock
from refindex.knowledge.parser import SectionParser, parse_sections
from refindex.knowledge.query import QueryService

__all__ = [
    # Core components
    "SectionParser",
    "parse_sections",
    "SectionIndex",
    "build_index",
    "QueryService",
    "DocumentLoader",
    "load_index",
    "SectionFormatter",
    # Data models
    "Section",
    "CodeBlock",
    "TextBlock",
]

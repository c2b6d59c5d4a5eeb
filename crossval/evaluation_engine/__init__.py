"""
Evaluation Engine
=================

Responsibility:
- Summarize validation losses across resampling pairs.
- Record per-round evaluations of a search (SearchTrace) as a DataFrame.
"""

from .cv_analysis import loss_summary
from .search_trace import SearchTrace

__all__ = ['loss_summary', 'SearchTrace']

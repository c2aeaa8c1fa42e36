"""Structured logging module for SCE.

Provides configurable logging with JSON format support and file rotation.
Records emitted during an analysis carry the analyzed page URL.
"""

from sce.logging.config import configure_logging
from sce.logging.context import (
    AnalysisContextFilter,
    analysis_context,
    get_analysis_context,
)
from sce.logging.handlers import JSONFormatter

__all__ = [
    "AnalysisContextFilter",
    "JSONFormatter",
    "analysis_context",
    "configure_logging",
    "get_analysis_context",
]

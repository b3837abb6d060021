"""
vocab_coverage package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .classifier import classify_document
from .config import CoverageConfig, config_from_dict, config_from_yaml, load_config
from .dictionary import DictionaryStore, Provenance
from .models import Classification, Document, Paragraph, Token, TokenKind, TokenStats
from .pipeline import analyze_corpus, analyze_file, analyze_text, run_analysis
from .plugin import ExpansionPlugin, PluginError, load_plugin_file
from .registry import TokenStatsRegistry
from .rendering import render_html
from .tokenization import Tokenizer, tokenize

__all__ = [
    "Classification",
    "CoverageConfig",
    "DictionaryStore",
    "Document",
    "ExpansionPlugin",
    "Paragraph",
    "PluginError",
    "Provenance",
    "Token",
    "TokenKind",
    "TokenStats",
    "TokenStatsRegistry",
    "Tokenizer",
    "analyze_corpus",
    "analyze_file",
    "analyze_text",
    "classify_document",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "load_plugin_file",
    "render_html",
    "run_analysis",
    "tokenize",
]

__version__ = "0.1.0"

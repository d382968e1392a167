"""Syntax checks, tokenizing, expansion, syntax trees and here-documents for a small shell."""

__version__ = "0.1.0"
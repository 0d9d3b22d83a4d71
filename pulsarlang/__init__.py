"""Lexer, syntax tree, type inference and backend pipeline for Pulsar."""

__version__ = "0.1.0"
"""Syntax tree nodes for Pulsar (types, expressions, statements, declarations) and pretty printing."""
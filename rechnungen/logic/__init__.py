"""Core logic package for the invoice statement builder.

Modules:
- collector: Directory listing, extension filter and mtime ordering.
- merger: Per-category orchestration (GUI/CLI-agnostic).
"""

"""Command metadata tree.

This package provides:
- models: The immutable tree (CommandInfo, ArgumentInfo, Name, completion kinds)
- tree: Walking and rewriting helpers
- loader: Decoding of JSON/TOML tool info dumps
"""

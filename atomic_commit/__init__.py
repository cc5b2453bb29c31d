"""
atomic-commit: turn a dirty working tree into a sequence of small,
well-described git commits planned by a language model.
"""

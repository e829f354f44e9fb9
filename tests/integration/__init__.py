"""
Integration tests for vectordist.

These tests drive the metrics the way an optimizer does: many
gradient steps through the registry, from several threads at once.
"""

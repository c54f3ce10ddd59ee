"""
Test suite for the Transcript Bulletizer.

This package contains tests for all core functionality including:
- Type definitions and result rendering
- Configuration and environment overrides
- Each pipeline stage (cleaning, segmentation, clauses, scoring, selection,
  condensation, deduplication, classification)
- End-to-end bulletizing behaviour
- The command-line interface
"""

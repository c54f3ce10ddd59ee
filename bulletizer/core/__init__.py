"""
Core functionality for the Transcript Bulletizer.

This package contains the main logic for:
- Transcript cleaning and sentence/list-item segmentation
- Clause splitting, salience scoring and adaptive selection
- Bullet condensation, deduplication and classification
- Result rendering in different text profiles
- Configuration management
"""

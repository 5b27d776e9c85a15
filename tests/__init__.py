"""
App Store SDK Test Suite.

This package contains:
- unit/: Unit tests (no network, temporary directories only)
- integration/: App handle and CLI against a mocked HTTP app store
"""

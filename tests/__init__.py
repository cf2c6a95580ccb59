"""Test suite for buildkeep.

Test Structure:
- unit/: Unit tests for individual components
  - io/: Real and fake filesystem implementations
  - caching/: Store, signature, selection, validation, transfer, lifecycle
  - config/: App and project config loading
  - logging/: Logging configuration
  - cli/: Command-line interface
- integration/: Multi-build scenarios against real directories
- conftest.py: Shared fixtures and test configuration
"""

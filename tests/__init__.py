"""
Test suite for Class Breaks.

This package contains all tests organized by component:
- test_algorithms/: Tests for the breakpoint and classification algorithms
- test_config.py, test_logging_config.py: Tests for the ambient configuration
"""

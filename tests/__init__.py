"""Test suite for memberflect.

Test Structure:
- domain/: Tests for models, resolution, accessors, caching and mapping
- application/: Tests for the Reflector facade and the public API
- infrastructure/: Tests for configuration and logging
- performance/: Cache behaviour under repeated and concurrent access

Run tests with pytest:
    pytest                    # Run all tests
    pytest -m unit            # Run unit tests only
    pytest -m performance     # Run performance tests only
"""

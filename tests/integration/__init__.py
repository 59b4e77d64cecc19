"""
Integration tests.

These tests talk to a running Redis server and only run when
USE_REAL_REDIS=1; they are slower than unit tests.
"""

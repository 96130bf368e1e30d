"""
Shared utilities for talking to external services.

- http.py  - ``requests`` session with a default timeout and User-Agent
"""

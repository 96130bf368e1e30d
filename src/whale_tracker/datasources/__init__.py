"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, endpoint helpers, JSON decoding
    ├── normalize.py      # Raw payload -> schemas models
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Only ``inaturalist/`` exists today. Fetch functions are blocking (they use
the shared ``requests`` session); the state layer runs them in a worker
thread with ``asyncio.to_thread``.
"""

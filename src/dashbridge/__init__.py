"""dashbridge -- Realtime command bridge for the developer dashboard.

This package implements the thin backend behind the browser dashboard:
a persistent socket connection that multiplexes command channels to the
backend API and streams results back, plus a few HTTP routes that proxy
auxiliary lookups with bounded time.
"""

__version__ = "0.1.0"

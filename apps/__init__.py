"""
Apps package - FastAPI services built on the fan-out library.

This package contains:
- fanout_gateway: fans /api/1 out to /api/2 and /api/3 under a shared deadline
"""

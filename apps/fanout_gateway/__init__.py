"""
Fan-Out Gateway Service

FastAPI service demonstrating fan-out orchestration:
- /api/1 calls /api/2 and /api/3 concurrently under one shared deadline and
  returns both values, or a bare 500 if any call failed
- /api/2 and /api/3 simulate work by sleeping for a random (GET) or
  caller-supplied (POST) number of milliseconds

Usage:
    uvicorn apps.fanout_gateway.main:app --port 8080
"""

__version__ = "0.1.0"

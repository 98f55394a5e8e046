"""Core script-host primitives (event bus and typed event payloads).

Kept free of FastAPI and Redis concerns so it can be reused by the game host, the API, and tests.
"""

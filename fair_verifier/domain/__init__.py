"""Domain layer (pure logic).

- Keep verification rules and credential policy here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI, no Redis.
- Prefer deterministic functions (the current time is passed in as an argument).
"""

"""
Web application package for the Sharp engine.

Provides a FastAPI REST API that returns the engine's move for a FEN
position. Serve it with any ASGI server, e.g. `uvicorn web.app:app`.
"""

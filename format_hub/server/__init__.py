"""HTTP API for Format Hub.

WHY: Exposes the handler registry to clients that speak HTTP rather than
the command line.

HOW: app.py defines the FastAPI app and routes, models.py the Pydantic
response schemas.
"""

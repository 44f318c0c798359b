"""
ASGI entry point. State lives in the in-memory repositories, so it is lost
on restart.

Run with:
    JWT_SECRET=... uvicorn asgi:app --reload
"""

from app import create_app

app = create_app()

"""
ASGI entry point.

Run with:
    uvicorn asgi:app --reload
or, honouring HOST/PORT from the environment:
    python asgi.py
"""

import uvicorn

from app import create_app
from config import AppSettings

settings = AppSettings()
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)

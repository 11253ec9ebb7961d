"""
Local development server for the loyalty service.

Usage:
    python serve.py

Host and port come from HOST / PORT (see settings.py or .env).
"""

import uvicorn

from settings import settings


def run_server():
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run_server()

#!/usr/bin/env python3
"""
Development server for the Sweet Moment pricing API.

Usage:
    python run_server.py
    python run_server.py --port 8001 --reload
"""

import argparse

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Sweet Moment pricing API")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to run on")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    args = parser.parse_args()

    uvicorn.run("sweet_moment.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()

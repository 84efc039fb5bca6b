#!/usr/bin/env python3
"""
Simple script to run the quote engine API server
"""
import uvicorn
import sys
import os

# Add the backend directory to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core.environment import get_env_bool, get_env_int

if __name__ == "__main__":
    port = get_env_int("PORT", 8000)

    print("Starting Room AC Quote API...")
    print(f"Server will be available at: http://localhost:{port}")
    print(f"API documentation: http://localhost:{port}/docs")
    print(f"Health check: http://localhost:{port}/healthz")
    print("\nPress Ctrl+C to stop the server\n")

    try:
        uvicorn.run(
            "app.main:app",
            host="0.0.0.0",
            port=port,
            reload=get_env_bool("RELOAD", True),
            log_level="info"
        )
    except KeyboardInterrupt:
        print("\nServer stopped")

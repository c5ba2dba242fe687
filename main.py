#!/usr/bin/env python3
"""
Technicians Business: launch the web GUI.

Usage:
    python main.py                          # http://localhost:8000
    python main.py --port 9000              # http://localhost:9000
    python main.py --host 0.0.0.0           # listen on all interfaces
    python main.py --seed /path/to/jobs.json
    python main.py --reload                 # auto-reload on code changes
"""

from __future__ import annotations

import argparse
import os
import sys
import webbrowser
from pathlib import Path


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Launch the Technicians Business web interface.",
    )
    parser.add_argument(
        "--host", default=os.getenv("APP_HOST", "127.0.0.1"),
        help="Bind address (default: 127.0.0.1 or APP_HOST env var)",
    )
    parser.add_argument(
        "--port", type=int, default=int(os.getenv("APP_PORT", "8000")),
        help="Port to listen on (default: 8000 or APP_PORT env var)",
    )
    parser.add_argument(
        "--seed", type=Path, default=None,
        help="JSON file of records to start from (default: built-in sample or APP_SEED_PATH)",
    )
    parser.add_argument(
        "--reload", action="store_true",
        help="Enable auto-reload on file changes (development mode)",
    )
    parser.add_argument(
        "--no-browser", action="store_true",
        help="Don't open a browser window automatically",
    )
    args = parser.parse_args()

    # The app reads its seed path from the environment at import time
    if args.seed is not None:
        if not args.seed.exists():
            print(f"Error: seed file not found at {args.seed}")
            sys.exit(1)
        os.environ["APP_SEED_PATH"] = str(args.seed)

    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn is not installed.")
        print("  pip install uvicorn[standard]")
        sys.exit(1)

    url = f"http://{'localhost' if args.host == '0.0.0.0' else args.host}:{args.port}"
    seed = os.getenv("APP_SEED_PATH") or "built-in sample"
    print(f"Starting Technicians Business at {url}")
    print(f"Seed: {seed}")
    print()

    if not args.no_browser:
        # Open browser after a short delay to let the server start
        import threading
        threading.Timer(1.5, webbrowser.open, args=(url,)).start()

    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()

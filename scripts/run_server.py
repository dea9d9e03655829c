#!/usr/bin/env python3
"""
Run the meeting links webhook API under uvicorn.
"""

import argparse
import sys
from pathlib import Path

import uvicorn

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from meeting_links.core import config


def main():
    parser = argparse.ArgumentParser(description="Start the meeting links webhook server")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    issues = config.validate_config()
    for issue in issues:
        print(f"⚠️  {issue}")

    uvicorn.run(
        "meeting_links.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="debug" if config.debug_enabled() else "info",
    )


if __name__ == "__main__":
    main()

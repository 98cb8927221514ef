"""
Placement Service Launcher

Starts the placement selector API from the placement/ package.

Usage:
    python scripts/run_placement_service.py --host 0.0.0.0 --port 8010

Environment Variables:
    PLACEMENT_API_PORT: API port (default: 8010)
    PLACEMENT_BIND_HOST: Bind address (default: 0.0.0.0)
    PLACEMENT_DATABASE_URL: SQLAlchemy URL of the inventory database
"""
import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from placement.config import API_PORT, BIND_HOST, DATABASE_URL


def main() -> None:
    parser = argparse.ArgumentParser(description="Run placement selector service")
    parser.add_argument("--host", default=BIND_HOST)
    parser.add_argument("--port", type=int, default=API_PORT)
    args = parser.parse_args()

    print("=" * 60)
    print("Placement Selector Service")
    print("=" * 60)
    print(f"API Address: {args.host}:{args.port}")
    print(f"Database: {DATABASE_URL}")
    print("=" * 60)

    uvicorn.run("placement.service:app", host=args.host, port=args.port, reload=False)


if __name__ == "__main__":
    main()

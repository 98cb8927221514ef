"""
Seed the placement inventory database from a JSON file.

Usage:
    python scripts/seed_inventory.py inventory.json
"""
import argparse
import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from placement.database import SessionLocal, init_db
from placement.inventory import load_inventory
from placement.logging_config import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Load profiles, docks, pools and volumes into the placement database")
    parser.add_argument("inventory", help="Path to inventory JSON file")
    args = parser.parse_args()

    setup_logging("seed")
    data = json.loads(Path(args.inventory).read_text(encoding="utf-8"))

    init_db()
    db = SessionLocal()
    try:
        counts = load_inventory(db, data)
    finally:
        db.close()

    print(json.dumps(counts, indent=2))


if __name__ == "__main__":
    main()

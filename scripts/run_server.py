"""Run the match API from a source checkout.

Usage:
    python scripts/run_server.py --port 8081
"""
import sys
from pathlib import Path

# allow running without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from matchtracker.server import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())

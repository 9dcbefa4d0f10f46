"""
Create the tracking tables in the configured database.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from homecalc.config import get_settings
from homecalc.db.database import init_db


def main():
    settings = get_settings()
    print(f"Creating tables in {settings.database_url}")
    init_db()
    print("Done.")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Store initialization script for the question bank
Run this to create the local store and seed the default data
"""

import sys
import os
import argparse

# Add the project directory to the Python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from question_bank.config import settings
from question_bank.database import init_storage, COLLECTIONS
from question_bank.logging_config import configure_logging

def init_store(path):
    """Seed the store at path and report what it holds"""
    try:
        print(f"🔄 Initializing local store at '{path}'...")
        db = init_storage(path)

        print("\n📋 Collections:")
        for table in COLLECTIONS:
            print(f"  - {table}: {len(db.select(table))} records")

        current_user = db.get_current_user()
        if current_user:
            print(f"\n👤 Signed-in user: {current_user['name']} <{current_user['email']}>")

        print("\n🎉 Store ready!")
        return True

    except (OSError, ValueError) as e:
        print(f"❌ Error initializing store: {e}")
        print("\n💡 Troubleshooting:")
        print("1. Check that STORAGE_PATH points to a writable directory")
        print("2. Remove or fix any hand-edited JSON files in the store")
        return False

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Initialize the question bank store")
    parser.add_argument("--path", default=settings.storage_path, help="Store directory")
    args = parser.parse_args()

    configure_logging()
    success = init_store(args.path)

    sys.exit(0 if success else 1)

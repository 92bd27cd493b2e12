#!/usr/bin/env python3
# =============================================================================
# scripts/seed_admin.py - Create the Admin Account
# =============================================================================
# Admins can't register through the API. Run this once against a fresh
# database to create one. Does nothing if the email is already taken.
#
# Usage:
#   python scripts/seed_admin.py
#   python scripts/seed_admin.py --email ops@temo.local --password 'S0mething!'
#
# Defaults can also come from ADMIN_NAME / ADMIN_EMAIL / ADMIN_PASSWORD.
# =============================================================================

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from core.services import UserService
from lib.supabase_client import SupabaseClient


def main():
    """Create the admin user."""
    parser = argparse.ArgumentParser(description="Seed the Temo Connect admin account")
    parser.add_argument("--name", default=os.getenv("ADMIN_NAME", "Admin"))
    parser.add_argument("--email", default=os.getenv("ADMIN_EMAIL", "admin@temo.local"))
    parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD", "Admin@123"))
    args = parser.parse_args()

    users = UserService(SupabaseClient.init())
    try:
        admin = users.create_admin(args.name, args.email, args.password)
    finally:
        SupabaseClient.close()

    if admin is None:
        print(f"Admin already exists: {args.email}")
    else:
        print(f"Admin seeded: {args.email} (id {admin['id']})")


if __name__ == "__main__":
    main()

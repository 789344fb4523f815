#!/usr/bin/env python3
"""
Seed staff accounts into the Event Booking API database.

Creates the schema if needed, then inserts each ``username:role`` pair
given on the command line with a bcrypt-hashed password.  Usernames
that already exist are skipped and left untouched; this script never
reads or changes existing passwords.

Usage:
    python seed_users.py --db ./event_booking.db superadmin:superadmin admin:admin

Passwords are prompted for each user unless ``--password`` is given
(the same password is then used for every user).
"""

import argparse
import getpass
import sqlite3
import sys

from event_booking_api.app.core.config import settings
from event_booking_api.app.core.db import apply_migrations, get_database_path
from event_booking_api.app.core.security import PasswordHasher


def parse_user(value: str) -> tuple:
    username, sep, role = value.partition(":")
    if not sep or not username or not role:
        raise argparse.ArgumentTypeError(f"expected username:role, got {value!r}")
    return username, role


def seed(conn: sqlite3.Connection, users: list, hasher: PasswordHasher) -> list:
    """Insert ``(username, role, password)`` triples; return the usernames inserted."""
    inserted = []
    for username, role, password in users:
        cur = conn.execute(
            "INSERT OR IGNORE INTO users (username, password_hash, role) VALUES (?, ?, ?)",
            (username, hasher.hash(password), role),
        )
        if cur.rowcount:
            inserted.append(username)
    conn.commit()
    return inserted


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed users into the booking database (SQLite).")
    ap.add_argument("users", nargs="+", type=parse_user, help="username:role pairs")
    ap.add_argument("--db", default=settings.database_url, help="Path to SQLite DB file (default: DATABASE_URL)")
    ap.add_argument("--password", help="Password for every user. If omitted, you'll be prompted per user.")
    ap.add_argument("--rounds", type=int, default=settings.bcrypt_rounds, help="bcrypt cost factor")
    args = ap.parse_args()

    triples = []
    for username, role in args.users:
        password = args.password or getpass.getpass(f"Password for {username}: ")
        if not password:
            print(f"[!] Empty password is not allowed ({username}).", file=sys.stderr)
            sys.exit(1)
        triples.append((username, role, password))

    conn = sqlite3.connect(get_database_path(args.db))
    try:
        apply_migrations(conn)
        inserted = seed(conn, triples, PasswordHasher(rounds=args.rounds))
    finally:
        conn.close()

    for username, _, _ in triples:
        status = "inserted" if username in inserted else "skipped (exists)"
        print(f"[+] {username}: {status}")


if __name__ == "__main__":
    main()

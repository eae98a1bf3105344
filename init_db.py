# -*- coding: utf-8 -*-
"""
init_db.py - create or rebuild the bookstore tables.

Modes:
- python init_db.py --create    create MISSING tables (existing data is kept)
- python init_db.py --reset     drop every table and create them again (ALL DATA IS LOST)

Works with SQLite and PostgreSQL alike.
"""

import argparse

from app import create_app
from extensions import db


def drop_all_tables():
    """Drop every table known to the models."""
    db.drop_all()
    db.session.commit()


def create_missing_tables():
    """Create tables that do not exist yet (no ALTER of existing ones)."""
    db.create_all()
    db.session.commit()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Init bookstore DB tables")
    grp = parser.add_mutually_exclusive_group(required=True)
    grp.add_argument("--create", action="store_true", help="create missing tables (nothing is dropped)")
    grp.add_argument("--reset", action="store_true", help="drop all tables and recreate them (data is lost)")

    args = parser.parse_args(argv)

    app = create_app()
    with app.app_context():
        if args.reset:
            print("-> Dropping tables ...")
            drop_all_tables()
            print("-> Creating tables ...")
            create_missing_tables()
            print("Done: tables recreated from scratch.")
        elif args.create:
            print("-> Creating missing tables ...")
            create_missing_tables()
            print("Done: missing tables created (existing ones untouched).")


if __name__ == "__main__":
    main()

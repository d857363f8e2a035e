"""Seed a local database with one demo order.

Uses ACCESS_KEY / DATA_DIR / DB_FILENAME from the environment unless
--db-path is given, e.g.:

    python scripts/seed_demo.py --db-path data/orders.sqlite3
    curl 'localhost:8000/api/v1/orders/1?currency=EUR'
"""

from orderfx.db.seed import main

if __name__ == "__main__":
    main()

"""Command line entry point: ``python -m src.catalog [serve|init-db|seed PATH]``."""
import argparse
import os
import sys

import uvicorn

from . import database
from .main import app, setup_logging
from .seed import SEED_FILE, load_seed_file, seed_products

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m src.catalog", description="Storefront catalog API")
    commands = parser.add_subparsers(dest="command")

    serve = commands.add_parser("serve", help="run the HTTP server (default)")
    serve.add_argument("--host", default=HOST)
    serve.add_argument("--port", type=int, default=PORT)

    commands.add_parser("init-db", help="create the database tables")

    seed = commands.add_parser("seed", help="load products from a JSON array file")
    seed.add_argument("path", nargs="?", default=SEED_FILE)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()

    if args.command == "init-db":
        database.init_db()
        return 0

    if args.command == "seed":
        if not args.path:
            parser.error("seed needs a PATH argument or the SEED_FILE environment variable")
        database.init_db()
        db = database.SessionLocal()
        try:
            loaded = seed_products(db, load_seed_file(args.path))
        finally:
            db.close()
        print(f"Loaded {loaded} product(s) from {args.path}")
        return 0

    host = getattr(args, "host", HOST)
    port = getattr(args, "port", PORT)
    uvicorn.run(app, host=host, port=port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Main entry point for the Recap meeting summary service.
"""
import argparse
import sys

from recap.config import DATABASE_URL, HOST, PORT
from recap.database.models import init_db, close_connections
from recap.utils.logger import get_logger

logger = get_logger(__name__)


def run_server(host: str, port: int, debug: bool = False):
    """Run the API server."""
    from recap.api.server import create_app

    app = create_app()
    logger.info(f"Starting Recap API on {host}:{port}")
    app.run(host=host, port=port, debug=debug)


def run_init_db(database_url: str = None):
    """Create the database tables."""
    engine, session_factory = init_db(database_url or DATABASE_URL)
    logger.info("Database tables created")
    close_connections(session_factory, engine)


def main():
    """Main entry point for the application."""
    parser = argparse.ArgumentParser(description="Recap meeting summary service")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Server command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=HOST, help="Interface to bind")
    serve_parser.add_argument("--port", type=int, default=PORT, help="Port to listen on")
    serve_parser.add_argument("--debug", action="store_true", help="Run in debug mode")

    # Database command
    db_parser = subparsers.add_parser("init-db", help="Create the database tables")
    db_parser.add_argument("--database-url", default=None, help="Database URL, defaults to DATABASE_URL")

    args = parser.parse_args()

    try:
        if args.command == "serve":
            run_server(args.host, args.port, debug=args.debug)
        elif args.command == "init-db":
            run_init_db(args.database_url)
        else:
            parser.print_help()

    except Exception as e:
        logger.error(f"Application error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

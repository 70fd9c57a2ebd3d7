"""CLI for the repair desk: bootstrap the database, seed lookup data, send reminders."""

from __future__ import annotations

import argparse
import asyncio
import sys


async def cmd_init_db(args):
    """Create tables and seed approval statuses."""
    from repairdesk.db.engine import init_db

    await init_db()
    print("Database initialised")


async def cmd_create_user(args):
    """Register a user that can own or approve workorder items."""
    from repairdesk.db import crud
    from repairdesk.db.engine import async_session_factory, init_db

    await init_db()
    async with async_session_factory() as db:
        if args.id and await crud.get_user(db, args.id):
            print(f"User {args.id} already exists")
            sys.exit(1)
        user = await crud.create_user(
            db,
            email=args.email,
            first_name=args.first_name,
            last_name=args.last_name,
            active=not args.inactive,
            user_id=args.id or None,
        )

    state = "active" if user.active else "inactive"
    print(f"User created: {user.full_name} (id={user.id}, {state})")


async def cmd_create_config_type(args):
    """Add a category type that configs can be filed under."""
    from repairdesk.db import crud
    from repairdesk.db.engine import async_session_factory, init_db

    await init_db()
    async with async_session_factory() as db:
        if await crud.get_config_type_by_name(db, args.name):
            print(f"Config type '{args.name}' already exists")
            sys.exit(1)
        ct = await crud.create_config_type(db, args.name)

    print(f"Config type created: {ct.name} (id={ct.id})")


async def cmd_repair_notify(args):
    """Push the approved-repairs reminder to the chat group."""
    import httpx

    from repairdesk.config import get_settings
    from repairdesk.db.engine import async_session_factory
    from repairdesk.services.chat import LineNotifier
    from repairdesk.services.workorders import repair_notify

    settings = get_settings()
    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        notifier = LineNotifier.from_config(client, settings.line)
        async with async_session_factory() as db:
            sent, count, message = await repair_notify(db, notifier, settings)

    if args.show or not sent:
        print(message or "No approved items")
    print(f"Approved items: {count}, sent: {'yes' if sent else 'no'}")
    if count and not sent:
        sys.exit(1)


def main():
    from repairdesk.config import get_settings
    from repairdesk.logging_config import setup_logging

    parser = argparse.ArgumentParser(description="Repair desk CLI")
    subparsers = parser.add_subparsers(dest="command")

    # init-db
    subparsers.add_parser("init-db", help="Create tables and seed approval statuses")

    # create-user
    cu = subparsers.add_parser("create-user", help="Create a user")
    cu.add_argument("--email", required=True, help="User email")
    cu.add_argument("--first-name", default="", help="First name")
    cu.add_argument("--last-name", default="", help="Last name")
    cu.add_argument("--id", default="", help="Explicit user id (e.g. from the identity provider)")
    cu.add_argument("--inactive", action="store_true", help="Create the user as inactive")

    # create-config-type
    ct = subparsers.add_parser("create-config-type", help="Create a config type")
    ct.add_argument("--name", required=True, help="Type name")

    # repair-notify
    rn = subparsers.add_parser("repair-notify", help="Push the approved-repairs reminder")
    rn.add_argument("--show", action="store_true", help="Print the composed message")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(get_settings().log_level)

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "create-user":
        asyncio.run(cmd_create_user(args))
    elif args.command == "create-config-type":
        asyncio.run(cmd_create_config_type(args))
    elif args.command == "repair-notify":
        asyncio.run(cmd_repair_notify(args))


if __name__ == "__main__":
    main()

"""Storefront management CLI.

Creates and drops the relational schema and bootstraps admin accounts.

Usage:
    python src/manage.py setup-db
    python src/manage.py drop-db
    python src/manage.py create-admin --email admin@example.com --password s3cret --name "Shop Admin"
"""

import argparse
import sys


def _initialized_domain():
    from storefront.domain import storefront

    print("Initializing storefront domain...")
    storefront.init()
    return storefront


def setup_database():
    """Create every table for the configured providers."""
    from storefront.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    """Drop every table for the configured providers."""
    from storefront.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def create_admin(email, password, name=None):
    """Register an admin account, or promote the existing account with that email."""
    from storefront.identity.user.administration import ChangeUserRole
    from storefront.identity.user.registration import RegisterUser
    from storefront.identity.user.user import Role, User

    domain = _initialized_domain()
    with domain.domain_context():
        existing = domain.repository_for(User).find_by_email(email)
        if existing is not None:
            domain.process(ChangeUserRole(user_id=existing.id, role=Role.ADMIN.value), asynchronous=False)
            print(f"Promoted {existing.email} to admin.")
            return str(existing.id)

        user_id = domain.process(
            RegisterUser(email=email, password=password, name=name, role=Role.ADMIN.value),
            asynchronous=False,
        )
        print(f"Created admin account {email}.")
        return user_id


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Create or promote an admin account")
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)
    admin_parser.add_argument("--name", default=None)

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-admin":
        create_admin(args.email, args.password, args.name)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

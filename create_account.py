"""
Provision a login account in the configured credential store.

Usage:
    AUTH_STORE=sqlite python create_account.py alice
"""

import argparse
import asyncio
import getpass

from auth.dependencies import get_credential_store
from auth.exceptions import AccountExists
from auth.services.provisioning import provision_account


def main():
    """Create an account from command-line arguments."""
    parser = argparse.ArgumentParser(description="Create a login account")
    parser.add_argument("username")
    parser.add_argument("--password", help="Prompted for when omitted")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    try:
        account = asyncio.run(provision_account(get_credential_store(), args.username, password))
    except AccountExists as e:
        raise SystemExit(e.message)

    print(f"Created account {account.username} (id={account.id})")


if __name__ == "__main__":
    main()

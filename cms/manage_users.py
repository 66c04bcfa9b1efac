#!/usr/bin/env python3
"""
Maintain the CMS credential file offline.

The web application only reads users.yml; this script is how entries get in
and out of it. A fresh checkout ships no users.yml, so nobody can sign in until
the first `add` creates the file.

Usage:
    python manage_users.py add USERNAME        # prompts for the password
    python manage_users.py remove USERNAME
    python manage_users.py list
    python manage_users.py hash                # print a hash without saving
"""

import argparse
import sys
from getpass import getpass

from config import get_server_config
from services.credential_store import CredentialStore


def _prompt_password() -> str:
    password = getpass('Password: ')
    if password != getpass('Repeat password: '):
        raise ValueError('Passwords do not match.')
    if not password:
        raise ValueError('Password must not be empty.')
    return password


def cmd_add(store: CredentialStore, args) -> int:
    users = store.load_users()
    replacing = args.username in users
    users[args.username] = store.hash_password(args.password or _prompt_password())
    store.save_users(users)
    print(f"{'Updated' if replacing else 'Added'} {args.username} in {store.users_path}")
    return 0


def cmd_remove(store: CredentialStore, args) -> int:
    users = store.load_users()
    if args.username not in users:
        print(f'No user named {args.username}', file=sys.stderr)
        return 1
    del users[args.username]
    store.save_users(users)
    print(f'Removed {args.username} from {store.users_path}')
    return 0


def cmd_list(store: CredentialStore, args) -> int:
    for username in sorted(store.load_users()):
        print(username)
    return 0


def cmd_hash(store: CredentialStore, args) -> int:
    print(store.hash_password(args.password or _prompt_password()))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Manage CMS users')
    parser.add_argument('--users-file', help='credential file (default: CMS_USERS_PATH or cms/users.yml)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    add = subparsers.add_parser('add', help='add a user or replace their password')
    add.add_argument('username')
    add.add_argument('--password', help='read from the prompt when omitted')
    add.set_defaults(handler=cmd_add)

    remove = subparsers.add_parser('remove', help='remove a user')
    remove.add_argument('username')
    remove.set_defaults(handler=cmd_remove)

    listing = subparsers.add_parser('list', help='list usernames')
    listing.set_defaults(handler=cmd_list)

    hashing = subparsers.add_parser('hash', help='print a bcrypt hash for a password')
    hashing.add_argument('--password', help='read from the prompt when omitted')
    hashing.set_defaults(handler=cmd_hash)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    store = CredentialStore(args.users_file or get_server_config().users_path)
    try:
        return args.handler(store, args)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())

# accounts/management/commands/hash_password.py
import getpass

from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = "Print a password hash for the password_hash field of an accounts file."

    def add_arguments(self, parser):
        parser.add_argument("--password", help="Password to hash (prompted when omitted).")

    def handle(self, *args, **opts):
        password = opts.get("password")
        if not password:
            password = getpass.getpass("Password: ")
            if password != getpass.getpass("Password (again): "):
                raise CommandError("Passwords do not match.")
        if not password:
            raise CommandError("Password must not be empty.")
        self.stdout.write(make_password(password))

# accounts/management/commands/show_access.py
from django.core.management.base import BaseCommand, CommandError

from accounts.apps import gate
from accounts.policy import Role


class Command(BaseCommand):
    help = "List loaded accounts with their modules, or check one role against a path."

    def add_arguments(self, parser):
        parser.add_argument("--role", help="Role to check, e.g. HR_ADMIN.")
        parser.add_argument("--path", help="Request path to check, e.g. /hr/payroll.")

    def handle(self, *args, **opts):
        conf = gate()
        role, path = opts.get("role"), opts.get("path")
        if role or path:
            if not (role and path):
                raise CommandError("--role and --path must be given together.")
            if Role.parse(role) is None:
                raise CommandError(f"Unknown role: {role}")
            allowed = conf.policy.is_authorized(role, path)
            style = self.style.SUCCESS if allowed else self.style.ERROR
            self.stdout.write(style(f"{role} {path}: {'allowed' if allowed else 'denied'}"))
            return

        for account in conf.registry:
            modules = ", ".join(conf.policy.prefixes_for(account.role)) or "-"
            self.stdout.write(f"{account.username:<12} {account.role.value:<16} {modules}")
        self.stdout.write(self.style.SUCCESS(f"{len(conf.registry)} accounts loaded."))

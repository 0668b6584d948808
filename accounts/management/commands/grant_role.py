from django.core.management.base import BaseCommand, CommandError

from accounts.services import AccountService
from core.enums import UserRole
from core.exceptions import NotFoundError


class Command(BaseCommand):
    help = "Grant a role (admin or user) to an existing account"

    def add_arguments(self, parser):
        parser.add_argument("email", help="Email of the account to update")
        parser.add_argument(
            "--role",
            choices=UserRole.values(),
            default=UserRole.ADMIN.value,
            help="Role to grant (default: admin)",
        )

    def handle(self, *args, **options):
        role = UserRole.from_string(options["role"])
        try:
            user = AccountService().grant_role(email=options["email"], role=role)
        except NotFoundError as exc:
            raise CommandError(exc.message) from exc

        self.stdout.write(self.style.SUCCESS(f"{user.email} is now '{role.value}'"))

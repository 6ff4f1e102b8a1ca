"""
Create Admin Command.

Creates an admin account that can sign in with an e-mailed OTP.
Running it again for an existing email only updates name/role.
"""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.core.validators import validate_email
from django.core.exceptions import ValidationError
from django.db import transaction


class Command(BaseCommand):
    help = 'Create (or update) an admin account: create_admin <email> [name] [role]'

    def add_arguments(self, parser):
        parser.add_argument('email', type=str, help='Admin email (login)')
        parser.add_argument('name', nargs='?', default='', help='Display name')
        parser.add_argument(
            'role',
            nargs='?',
            default='admin',
            help='Role: admin or super_admin'
        )

    def handle(self, *args, **options):
        User = get_user_model()

        email = options['email'].strip().lower()
        try:
            validate_email(email)
        except ValidationError:
            raise CommandError(f"Invalid email: {options['email']}")

        role = options['role']
        valid_roles = [choice for choice, _ in User.ROLE_CHOICES]
        if role not in valid_roles:
            raise CommandError(f"Invalid role '{role}', expected one of: {', '.join(valid_roles)}")

        with transaction.atomic():
            admin = User.objects.get_by_email(email)
            if admin is not None:
                changed = []
                if options['name'] and admin.name != options['name']:
                    admin.name = options['name']
                    changed.append('name')
                if admin.role != role:
                    admin.role = role
                    changed.append('role')
                if changed:
                    admin.save(update_fields=changed)
                    self.stdout.write(
                        self.style.SUCCESS(f"Updated admin {email}: {', '.join(changed)}")
                    )
                else:
                    self.stdout.write(f"Admin {email} already exists")
                return

            User.objects.create_user(
                email=email,
                name=options['name'],
                role=role,
                is_staff=role == User.ROLE_SUPER_ADMIN,
            )

        self.stdout.write(self.style.SUCCESS(f"Created admin {email} ({role})"))

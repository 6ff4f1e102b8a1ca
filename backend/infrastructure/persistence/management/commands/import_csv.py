"""
Import CSV Command.

Bulk-load rows exported from the client-facing app:

    python manage.py import_csv QuizSubmission data/quiz-submissions.csv
    python manage.py import_csv Project data/projects.csv --dry-run

CSV format:
- The first row holds column headers. Headers are normalised to
  snake_case ("Brand Name", "brand-name" and "brandName" all become
  ``brand_name``).
- JSON columns hold JSON text; a plain comma separated value is read as
  a list of strings.
- Enum columns are matched case-insensitively against the model choices.
- Dates are ISO 8601 (YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS).
- Empty cells are skipped so the model default applies.
"""

import csv
import json
import re
from datetime import datetime, time

from django.contrib.auth import get_user_model
from django.core.exceptions import FieldDoesNotExist, ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.db import IntegrityError, models, transaction
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from domain.delivery.phase_state import to_bool


# Extra header spellings per model; everything else maps by field name.
FIELD_ALIASES = {
    'Project': {
        'plan': 'kit_type',
        'onboarding_answer': 'onboarding_answer_id',
    },
    'Task': {
        'project': 'project_id',
    },
}

# Managed by the ORM, cannot be set on insert.
AUTO_FIELDS = {'created_at', 'updated_at', 'version'}


def normalize_header(header):
    """``"Brand Name"`` / ``"brand-name"`` / ``"brandName"`` -> ``brand_name``."""
    header = re.sub(r'(?<=[a-z0-9])([A-Z])', r'_\1', header.strip())
    return re.sub(r'[\s\-]+', '_', header).lower()


def get_import_models():
    from infrastructure.persistence.models import (
        Lead,
        OnboardingAnswer,
        Project,
        QuizSubmission,
        Task,
    )

    return {
        'QuizSubmission': QuizSubmission,
        'Lead': Lead,
        'Project': Project,
        'OnboardingAnswer': OnboardingAnswer,
        'Task': Task,
        'Admin': get_user_model(),
    }


class RowError(Exception):
    pass


class Command(BaseCommand):
    help = 'Import rows from a CSV file: import_csv <Model> <path>'

    def add_arguments(self, parser):
        parser.add_argument(
            'model',
            type=str,
            help='QuizSubmission, Lead, Project, OnboardingAnswer, Task or Admin'
        )
        parser.add_argument('path', type=str, help='Path to the CSV file')
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Validate every row without writing anything'
        )

    def handle(self, *args, **options):
        model_name = options['model']
        import_models = get_import_models()
        if model_name not in import_models:
            raise CommandError(
                f"Unknown model '{model_name}'. Available: {', '.join(import_models)}"
            )
        model = import_models[model_name]
        dry_run = options['dry_run']

        try:
            with open(options['path'], newline='', encoding='utf-8-sig') as f:
                rows = list(csv.DictReader(f))
        except OSError as e:
            raise CommandError(f"Cannot read {options['path']}: {e}")

        if not rows:
            self.stdout.write(self.style.WARNING('No records found in CSV file'))
            return

        self.stdout.write(f"Importing {len(rows)} {model_name} rows{' (dry run)' if dry_run else ''}...")

        created = skipped = 0
        errors = []
        for index, row in enumerate(rows):
            # Row 1 is the header.
            row_number = index + 2
            try:
                data = self._transform_row(model_name, model, row)
                instance = self._build_instance(model, data)

                if 'id' in data and self._manager(model).filter(pk=instance.pk).exists():
                    skipped += 1
                    self.stdout.write(f"Row {row_number}: {model_name} {instance.pk} already exists, skipped")
                    continue

                instance.full_clean(validate_unique=True)

                if not dry_run:
                    with transaction.atomic():
                        instance.save(force_insert=True)
                created += 1
            except (RowError, ValidationError, IntegrityError, ValueError) as e:
                message = '; '.join(e.messages) if isinstance(e, ValidationError) else str(e)
                errors.append((row_number, message))
                self.stderr.write(self.style.ERROR(f"Row {row_number}: {message}"))

        if not dry_run and created:
            from infrastructure.persistence.models import AuditLog

            AuditLog.record(
                AuditLog.ACTION_IMPORT,
                model=model_name,
                path=options['path'],
                created=created,
                skipped=skipped,
                failed=len(errors),
            )

        verb = 'Valid' if dry_run else 'Created'
        self.stdout.write(
            self.style.SUCCESS(f"{verb}: {created}, skipped: {skipped}, failed: {len(errors)}")
        )
        if errors:
            raise CommandError(f"{len(errors)} row(s) failed to import")

    # =========================================================================
    # Row handling
    # =========================================================================

    def _manager(self, model):
        return getattr(model, 'all_objects', model._default_manager)

    def _resolve_field(self, model_name, model, header):
        name = normalize_header(header)
        name = FIELD_ALIASES.get(model_name, {}).get(name, name)
        try:
            return model._meta.get_field(name)
        except FieldDoesNotExist:
            for field in model._meta.concrete_fields:
                if field.attname == name:
                    return field
        raise RowError(f"Unknown column '{header}' for {model_name}")

    def _transform_row(self, model_name, model, row):
        data = {}
        for header, raw in row.items():
            if header is None:
                raise RowError('Row has more cells than the header')
            value = (raw or '').strip()
            if not value:
                continue

            field = self._resolve_field(model_name, model, header)
            if field.name in AUTO_FIELDS:
                continue
            if field.name == 'created_by':
                data['created_by'] = self._lookup_admin(value)
                continue
            data[field.attname] = self._convert(field, value)
        return data

    def _lookup_admin(self, value):
        admin = get_user_model().objects.get_by_email(value)
        if admin is None:
            raise RowError(f"Unknown admin email for created_by: {value}")
        return admin

    def _convert(self, field, value):
        if isinstance(field, models.JSONField):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                if value.startswith(('[', '{')):
                    raise RowError(f"Invalid JSON for {field.name}")
                return [item.strip() for item in value.split(',') if item.strip()]

        if field.choices:
            for choice, _label in field.flatchoices:
                if str(choice).lower() == value.lower():
                    return choice
            raise RowError(f"Invalid {field.name}: {value}")

        if isinstance(field, models.DateTimeField):
            parsed = parse_datetime(value)
            if parsed is None:
                day = parse_date(value)
                if day is None:
                    raise RowError(f"Invalid date format for {field.name}: {value}")
                parsed = datetime.combine(day, time.min)
            if timezone.is_naive(parsed):
                parsed = timezone.make_aware(parsed)
            return parsed

        if isinstance(field, models.BooleanField):
            return to_bool(value)

        if isinstance(field, models.IntegerField):
            try:
                return int(value)
            except ValueError:
                raise RowError(f"Invalid integer for {field.name}: {value}")

        return value

    def _build_instance(self, model, data):
        instance = model(**data)
        if model is get_user_model():
            instance.email = (instance.email or '').lower()
            instance.set_unusable_password()
        return instance

# notes/management/commands/check_references.py
"""
Django management command to check documentation links for rot.

Usage:
    python manage.py check_references
    python manage.py check_references --topic custom-user-model --broken-only
"""

from django.core.management.base import BaseCommand, CommandError

from notes.link_checker import check_references
from notes.models import Reference, Topic


class Command(BaseCommand):
    help = 'Checks every reference URL and records its HTTP status'

    def add_arguments(self, parser):
        parser.add_argument('--topic', type=str, help='Only check references of the topic with this slug')
        parser.add_argument('--broken-only', action='store_true', help='Only print broken references')
        parser.add_argument('--timeout', type=int, default=None, help='Per-request timeout in seconds')

    def handle(self, *args, **options):
        references = Reference.objects.select_related('topic')
        if options.get('topic'):
            if not Topic.objects.filter(slug=options['topic']).exists():
                raise CommandError(f"Topic '{options['topic']}' does not exist")
            references = references.filter(topic__slug=options['topic'])

        broken_only = options['broken_only']

        def report(reference, status):
            shown = status if status is not None else 'unreachable'
            if reference.is_broken:
                self.stdout.write(self.style.ERROR(f"[BROKEN] {reference.topic.slug}: {reference.url} ({shown})"))
            elif not broken_only:
                self.stdout.write(f"[OK] {reference.topic.slug}: {reference.url} ({shown})")

        summary = check_references(references, timeout=options.get('timeout'), callback=report)

        style = self.style.WARNING if summary['broken'] else self.style.SUCCESS
        self.stdout.write(style(
            f"Checked {summary['checked']} reference(s): {summary['ok']} ok, {summary['broken']} broken"
        ))

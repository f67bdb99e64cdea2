import json

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from core.services.client import InboxClient
from core.services.inbox import EMPTY_MESSAGE, Inbox
from core.services.presenter import present


class Command(BaseCommand):
    help = "Fetch the inbox from the API and print it with its display values."

    def add_arguments(self, parser):
        parser.add_argument('--url', help='API base URL (defaults to INBOX_API_URL)')
        parser.add_argument('--id', dest='request_id', help='show a single request')
        parser.add_argument('--json', action='store_true', help='print derived views as JSON')

    def handle(self, *args, **options):
        client = InboxClient(options.get('url'))
        now = timezone.now()

        if options.get('request_id'):
            result = client.get_request_by_id(options['request_id'])
            if not result.ok:
                if result.not_found:
                    raise CommandError(f"Request {options['request_id']} not found")
                raise CommandError(result.error)
            rows = [(result.data, present(result.data, now))]
        else:
            inbox = Inbox(client)
            if not inbox.load(now=now):
                raise CommandError(inbox.error)
            if inbox.is_empty:
                self.stdout.write(EMPTY_MESSAGE)
                return
            rows = inbox.rows(now=now)
            self.stdout.write(self.style.SUCCESS(
                f"{len(rows)} requests, synced {inbox.sync_time_display(now)}"
            ))

        if options.get('json'):
            payload = [{**r.to_dict(), 'view': v.to_dict()} for r, v in rows]
            self.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False))
            return

        for r, v in rows:
            marker = '*' if v.read_class else ' '
            badge = f"[{v.priority_label}] " if v.priority_label else ''
            self.stdout.write(
                f"{marker} {v.relative_time:>12}  {v.category_label:<11} {badge}{r.patient_name}"
                f"  ({v.estimated_time}, {v.doctor_initials})"
            )
            if v.abnormal_results_display:
                self.stdout.write(f"      abnormal: {v.abnormal_results_display}")
            if v.panels_count:
                self.stdout.write(f"      {v.panels_count} {v.panels_label}: {v.panels_display}")

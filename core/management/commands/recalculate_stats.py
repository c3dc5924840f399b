# Recalculate Freelancer Stats Management Command
from django.core.management.base import BaseCommand, CommandError
from django.db.models import Count, Q
from core.models import User


def success_rate(completed, cancelled):
    """Percentage of finished projects that were completed, rounded down."""
    finished = completed + cancelled
    if not finished:
        return 0
    return completed * 100 // finished


class Command(BaseCommand):
    help = 'Recalculates completed project counts and success rates for freelancers.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Run the command without saving changes to the database.',
        )
        parser.add_argument(
            '--batch-size',
            type=int,
            default=1000,
            help='Batch size for bulk processing.',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        batch_size = options['batch_size']

        if batch_size < 1:
            raise CommandError('--batch-size must be a positive integer.')

        self.recalculate_freelancers(dry_run, batch_size)

        if dry_run:
            self.stdout.write(self.style.SUCCESS('Dry run completed. No changes saved.'))
        else:
            self.stdout.write(self.style.SUCCESS('Recalculation completed successfully.'))

    def recalculate_freelancers(self, dry_run, batch_size):
        self.stdout.write('Recalculating freelancer stats...')
        freelancers = (
            User.objects
            .filter(is_freelancer=True)
            .annotate(
                completed_count=Count(
                    'freelancer_projects',
                    filter=Q(freelancer_projects__status='completed')
                ),
                cancelled_count=Count(
                    'freelancer_projects',
                    filter=Q(freelancer_projects__status='cancelled')
                ),
            )
            .order_by('created_at')
            .iterator(chunk_size=batch_size)
        )
        updates = []
        count = 0

        for user in freelancers:
            new_completed = user.completed_count
            new_rate = success_rate(user.completed_count, user.cancelled_count)

            if user.completed_projects != new_completed or user.success_rate != new_rate:
                if dry_run:
                    self.stdout.write(
                        f'  [DRY-RUN] User {user.id} ({user.username}): '
                        f'Completed {user.completed_projects} -> {new_completed}, '
                        f'Success rate {user.success_rate} -> {new_rate}'
                    )
                user.completed_projects = new_completed
                user.success_rate = new_rate
                updates.append(user)

            if len(updates) >= batch_size:
                if not dry_run:
                    User.objects.bulk_update(updates, ['completed_projects', 'success_rate'])
                updates = []

            count += 1
            if count % 100 == 0:
                self.stdout.write(f'Processed {count} freelancers...')

        if updates and not dry_run:
            User.objects.bulk_update(updates, ['completed_projects', 'success_rate'])

        self.stdout.write(f'Processed {count} freelancers total.')

import os

from django.contrib.auth.models import User
from django.core.management.base import BaseCommand, CommandError

from users.models import Profile
from users.serializers import MIN_PASSWORD_LENGTH


class Command(BaseCommand):
    help = 'Creates an admin account (or promotes an existing one) from options or ADMIN_EMAIL / ADMIN_PASSWORD'

    def add_arguments(self, parser):
        parser.add_argument('--email', default=os.getenv('ADMIN_EMAIL'))
        parser.add_argument('--password', default=os.getenv('ADMIN_PASSWORD'))
        parser.add_argument(
            '--superuser',
            action='store_true',
            help='Also grant Django admin site access',
        )

    def handle(self, *args, **options):
        email = (options['email'] or '').strip().lower()
        password = options['password']

        if not email:
            raise CommandError('An email is required (--email or ADMIN_EMAIL)')

        user = User.objects.filter(username__iexact=email).first()
        if user is None:
            if not password or len(password) < MIN_PASSWORD_LENGTH:
                raise CommandError(f'A password of at least {MIN_PASSWORD_LENGTH} characters is required')
            user = User.objects.create_user(username=email, email=email, password=password)
            self.stdout.write(self.style.SUCCESS(f'✓ Created user: {email}'))
        else:
            if password:
                user.set_password(password)
            self.stdout.write(f'- User already exists: {email}')

        if options['superuser']:
            user.is_staff = True
            user.is_superuser = True
        user.save()

        profile, _ = Profile.objects.get_or_create(user=user)
        profile.role = Profile.ROLE_ADMIN
        profile.save()

        self.stdout.write(self.style.SUCCESS(f'{email} now has the admin role'))

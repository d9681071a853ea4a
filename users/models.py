from django.db import models
from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver


class Profile(models.Model):
    ROLE_ADMIN = "admin"
    ROLE_USER = "user"
    ROLE_CHOICES = [
        (ROLE_ADMIN, "Admin"),
        (ROLE_USER, "User"),
    ]

    user = models.OneToOneField(User, on_delete=models.CASCADE)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)

    def __str__(self):
        return f"{self.user.email or self.user.username} - {self.role}"

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN or self.user.is_superuser


def role_for(user):
    """Role name for any user; superusers are always admins."""
    if user is None or not user.is_authenticated:
        return None
    if user.is_superuser:
        return Profile.ROLE_ADMIN
    profile = getattr(user, 'profile', None)
    return profile.role if profile else Profile.ROLE_USER


def is_admin(user):
    return role_for(user) == Profile.ROLE_ADMIN


# SIGNALS: auto-create Profile for new users
@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    if created:
        role = Profile.ROLE_ADMIN if instance.is_superuser else Profile.ROLE_USER
        Profile.objects.create(user=instance, role=role)


@receiver(post_save, sender=User)
def save_user_profile(sender, instance, **kwargs):
    # ensures the profile is saved whenever the user is saved
    if hasattr(instance, 'profile'):
        instance.profile.save()

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    ROLE_USER = 'user'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [(ROLE_USER, 'User'), (ROLE_ADMIN, 'Admin')]

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)
    location = models.CharField(max_length=100, blank=True, default='')
    availability = models.CharField(max_length=100, blank=True, default='')
    profile_photo = models.CharField(max_length=255, blank=True, default='', help_text="Public URL of the profile photo")
    is_public = models.BooleanField(default=True)
    is_banned = models.BooleanField(default=False)
    ban_reason = models.CharField(max_length=255, blank=True, default='')

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN

    @property
    def display_name(self):
        full = self.get_full_name()
        return full or self.username

    def __str__(self):
        return self.username

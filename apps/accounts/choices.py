"""Role choices for user accounts."""

from django.db import models


class UserRole(models.TextChoices):
    STANDARD = 'standard', 'Standard'
    ADMIN = 'admin', 'Admin'


class AdminLevel(models.IntegerChoices):
    LEVEL_1 = 1, 'Level 1'
    LEVEL_2 = 2, 'Level 2'
    LEVEL_3 = 3, 'Level 3'

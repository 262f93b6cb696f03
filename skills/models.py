from django.conf import settings
from django.db import models
from django.db.models.functions import Lower

User = settings.AUTH_USER_MODEL


class SkillStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    REJECTED = 'rejected', 'Rejected'


class Skill(models.Model):
    name = models.CharField(max_length=100)
    status = models.CharField(max_length=20, choices=SkillStatus.choices, default=SkillStatus.PENDING)
    rejection_reason = models.CharField(max_length=255, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(Lower('name'), name='unique_skill_name_ci'),
        ]

    @property
    def is_approved(self):
        return self.status == SkillStatus.APPROVED

    def __str__(self): return self.name


class OfferedSkill(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='offered_skills')
    skill = models.ForeignKey(Skill, on_delete=models.CASCADE, related_name='offered_by')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ['user', 'skill']

    def __str__(self): return f"{self.user} offers {self.skill}"


class WantedSkill(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='wanted_skills')
    skill = models.ForeignKey(Skill, on_delete=models.CASCADE, related_name='wanted_by')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ['user', 'skill']

    def __str__(self): return f"{self.user} wants {self.skill}"

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

User = settings.AUTH_USER_MODEL


class SwapStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    REJECTED = 'rejected', 'Rejected'
    COMPLETED = 'completed', 'Completed'


# action -> (required current status, resulting status)
TRANSITIONS = {
    'accept': (SwapStatus.PENDING, SwapStatus.ACCEPTED),
    'reject': (SwapStatus.PENDING, SwapStatus.REJECTED),
    'complete': (SwapStatus.ACCEPTED, SwapStatus.COMPLETED),
}


class SwapRequest(models.Model):
    sender = models.ForeignKey(User, on_delete=models.CASCADE, related_name='sent_swaps')
    receiver = models.ForeignKey(User, on_delete=models.CASCADE, related_name='received_swaps')
    offered_skill = models.ForeignKey('skills.Skill', on_delete=models.PROTECT, related_name='offered_in_swaps')
    wanted_skill = models.ForeignKey('skills.Skill', on_delete=models.PROTECT, related_name='wanted_in_swaps')
    message = models.TextField(blank=True, default='')
    status = models.CharField(max_length=20, choices=SwapStatus.choices, default=SwapStatus.PENDING, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-created_at', '-id']
        constraints = [
            models.CheckConstraint(condition=~models.Q(sender=models.F('receiver')), name='swap_not_self'),
        ]

    def is_participant(self, user_id):
        return user_id in (self.sender_id, self.receiver_id)

    def __str__(self):
        return f"Swap #{self.pk} {self.sender_id} -> {self.receiver_id} ({self.status})"


class Feedback(models.Model):
    swap = models.ForeignKey(SwapRequest, on_delete=models.CASCADE, related_name='feedback')
    author = models.ForeignKey(User, on_delete=models.CASCADE, related_name='feedback_given')
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)], help_text="Rating from 1 to 5")
    comment = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['swap', 'author'], name='unique_feedback_per_author'),
            models.CheckConstraint(condition=models.Q(rating__gte=1, rating__lte=5), name='feedback_rating_range'),
        ]

    def __str__(self):
        return f"{self.author} rated swap #{self.swap_id}: {self.rating}/5"

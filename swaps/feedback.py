"""
Feedback ledger: one rating per participant per completed swap.
"""
import logging
from collections import namedtuple

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction
from django.db.models import Avg, Count, Q

from core.errors import DuplicateFeedback, InvalidMessage, InvalidRating
from . import guards
from .ledger import get_swap_request
from .models import Feedback

logger = logging.getLogger(__name__)

FeedbackStats = namedtuple('FeedbackStats', [
    'total_reviews', 'avg_rating', 'five_star', 'four_star', 'three_star', 'two_star', 'one_star',
])

STAR_FIELDS = {5: 'five_star', 4: 'four_star', 3: 'three_star', 2: 'two_star', 1: 'one_star'}


def _clean_rating(rating):
    # bool is an int subclass; True must not count as a 1-star rating
    if isinstance(rating, bool):
        raise InvalidRating()
    if isinstance(rating, str):
        rating = rating.strip()
        if not rating.isdigit():
            raise InvalidRating()
        rating = int(rating)
    if not isinstance(rating, int) or not 1 <= rating <= 5:
        raise InvalidRating()
    return rating


def add_feedback(swap_id, author_id, rating, comment=None, *, using=DEFAULT_DB_ALIAS):
    author_id = guards.normalize_id(author_id)
    swap = get_swap_request(swap_id, using=using)
    guards.check_can_give_feedback(author_id, swap)
    rating = _clean_rating(rating)

    comment = (comment or '').strip()
    if len(comment) > settings.FEEDBACK_COMMENT_MAX_LENGTH:
        raise InvalidMessage(f'Comment must be at most {settings.FEEDBACK_COMMENT_MAX_LENGTH} characters')

    # the unique (swap, author) constraint decides; no existence pre-check
    try:
        with transaction.atomic(using=using):
            feedback = Feedback.objects.using(using).create(
                swap=swap, author_id=author_id, rating=rating, comment=comment,
            )
    except IntegrityError:
        if Feedback.objects.using(using).filter(swap=swap, author_id=author_id).exists():
            raise DuplicateFeedback()
        raise

    logger.info("feedback %s on swap %s by %s: %s/5", feedback.pk, swap.pk, feedback.author_id, rating)
    return Feedback.objects.using(using).select_related('author').get(pk=feedback.pk)


def get_swap_feedback(swap_id, *, using=DEFAULT_DB_ALIAS):
    swap = get_swap_request(swap_id, using=using)
    return list(Feedback.objects.using(using).select_related('author').filter(swap=swap))


def get_user_feedback_stats(user_id, *, using=DEFAULT_DB_ALIAS):
    """Rating counts and mean over feedback on every swap the user took part in."""
    aggregates = {field: Count('id', filter=Q(rating=stars)) for stars, field in STAR_FIELDS.items()}
    row = Feedback.objects.using(using).filter(
        Q(swap__sender_id=user_id) | Q(swap__receiver_id=user_id)
    ).aggregate(total_reviews=Count('id'), avg_rating=Avg('rating'), **aggregates)

    avg = row['avg_rating']
    return FeedbackStats(
        total_reviews=row['total_reviews'],
        avg_rating=round(avg, 1) if avg is not None else 0,
        **{field: row[field] for field in STAR_FIELDS.values()},
    )

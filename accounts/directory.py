"""
User directory: lookups the swap ledger needs about users,
plus ban management for admins.
"""
import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DEFAULT_DB_ALIAS
from django.db.models import (
    Exists, F, FloatField, Func, IntegerField, OuterRef, Prefetch, Q, Subquery, Value,
)
from django.db.models.functions import Coalesce

from core.errors import Forbidden, UserNotFound
from core.pagination import paginate

logger = logging.getLogger(__name__)

User = get_user_model()


def get_user(user_id, *, using=DEFAULT_DB_ALIAS):
    user_id = getattr(user_id, 'pk', user_id)
    try:
        return User.objects.using(using).get(pk=user_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise UserNotFound()


def find_user(user_id, *, using=DEFAULT_DB_ALIAS):
    """Like get_user but returns None for an unknown id."""
    try:
        return get_user(user_id, using=using)
    except UserNotFound:
        return None


def is_user_banned(user_id, *, using=DEFAULT_DB_ALIAS):
    return User.objects.using(using).filter(pk=user_id, is_banned=True).exists()


def user_offers_skill(user_id, skill_id, *, using=DEFAULT_DB_ALIAS):
    from skills.models import OfferedSkill
    return OfferedSkill.objects.using(using).filter(user_id=user_id, skill_id=skill_id).exists()


def ban_user(user_id, reason, *, using=DEFAULT_DB_ALIAS):
    user = get_user(user_id, using=using)
    if user.is_admin:
        raise Forbidden('Admins cannot be banned')
    user.is_banned = True
    user.ban_reason = reason or ''
    user.save(using=using, update_fields=['is_banned', 'ban_reason'])
    logger.info("user %s banned: %s", user.pk, user.ban_reason)
    return user


def unban_user(user_id, *, using=DEFAULT_DB_ALIAS):
    user = get_user(user_id, using=using)
    user.is_banned = False
    user.ban_reason = ''
    user.save(using=using, update_fields=['is_banned', 'ban_reason'])
    logger.info("user %s unbanned", user.pk)
    return user


# --- DISCOVERY / PROFILE ---
PROFILE_FIELDS = ('first_name', 'last_name', 'location', 'availability', 'profile_photo', 'is_public')


def _with_ratings(qs):
    """
    Annotate avg_rating / review_count over feedback on every swap the user
    took part in, as correlated subqueries so the two roles don't multiply rows.
    """
    from swaps.models import Feedback

    received = Feedback.objects.filter(
        Q(swap__sender_id=OuterRef('pk')) | Q(swap__receiver_id=OuterRef('pk'))
    ).order_by()
    return qs.annotate(
        avg_rating=Coalesce(
            Subquery(received.annotate(avg=Func(F('rating'), function='AVG', output_field=FloatField())).values('avg')[:1]),
            Value(0.0),
        ),
        review_count=Coalesce(
            Subquery(received.annotate(n=Func(F('id'), function='COUNT', output_field=IntegerField())).values('n')[:1]),
            Value(0),
        ),
    )


def _with_approved_skills(qs):
    from skills.models import OfferedSkill, SkillStatus, WantedSkill

    return qs.prefetch_related(
        Prefetch('offered_skills', queryset=OfferedSkill.objects.filter(skill__status=SkillStatus.APPROVED).select_related('skill')),
        Prefetch('wanted_skills', queryset=WantedSkill.objects.filter(skill__status=SkillStatus.APPROVED).select_related('skill')),
    )


def list_users(skill=None, search=None, availability=None, page=1, limit=None, *, using=DEFAULT_DB_ALIAS):
    """Public, non-banned users ordered by username, optionally narrowed by skill name, name/location or availability."""
    from skills.models import OfferedSkill, SkillStatus, WantedSkill

    qs = User.objects.using(using).filter(is_banned=False, is_public=True, is_active=True)
    skill = (skill or '').strip()
    if skill:
        links = {'user_id': OuterRef('pk'), 'skill__name__icontains': skill, 'skill__status': SkillStatus.APPROVED}
        qs = qs.filter(Exists(OfferedSkill.objects.filter(**links)) | Exists(WantedSkill.objects.filter(**links)))
    search = (search or '').strip()
    if search:
        qs = qs.filter(
            Q(username__icontains=search) | Q(first_name__icontains=search)
            | Q(last_name__icontains=search) | Q(location__icontains=search)
        )
    availability = (availability or '').strip()
    if availability:
        qs = qs.filter(availability__icontains=availability)

    qs = _with_approved_skills(_with_ratings(qs)).order_by('username')
    return paginate(qs, page, limit, settings.SWAP_PAGE_SIZE)


def get_public_user(user_id, *, using=DEFAULT_DB_ALIAS):
    """A non-banned user with ratings and approved skills; banned users read as unknown."""
    user_id = getattr(user_id, 'pk', user_id)
    qs = _with_approved_skills(_with_ratings(User.objects.using(using).filter(is_banned=False)))
    try:
        return qs.get(pk=user_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise UserNotFound()


def can_see_profile(user, viewer):
    """Private profiles are visible to their owner and to admins only."""
    if user.is_public:
        return True
    return viewer is not None and (viewer.pk == user.pk or getattr(viewer, 'is_admin', False))


def update_profile(user_id, fields, *, using=DEFAULT_DB_ALIAS):
    user = get_user(user_id, using=using)
    changed = [name for name in PROFILE_FIELDS if name in fields]
    for name in changed:
        setattr(user, name, fields[name])
    if changed:
        user.save(using=using, update_fields=changed)
        logger.info("user %s updated profile: %s", user.pk, ', '.join(changed))
    return user


def toggle_visibility(user_id, *, using=DEFAULT_DB_ALIAS):
    user = get_user(user_id, using=using)
    user.is_public = not user.is_public
    user.save(using=using, update_fields=['is_public'])
    logger.info("user %s is now %s", user.pk, 'public' if user.is_public else 'private')
    return user

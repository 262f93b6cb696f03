"""
Skill directory: canonical skill names with moderation status,
and the per-user offered/wanted lists.
"""
import logging

from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction

from core.errors import InvalidModeration, InvalidSkillName, SkillNotFound
from .models import OfferedSkill, Skill, SkillStatus, WantedSkill

logger = logging.getLogger(__name__)


def _clean_name(name):
    name = (name or '').strip()
    if not name:
        raise InvalidSkillName()
    if len(name) > Skill._meta.get_field('name').max_length:
        raise InvalidSkillName('Skill name must be at most 100 characters')
    return name


def resolve_or_create_skill(name, *, using=DEFAULT_DB_ALIAS):
    """Return the skill with this name (any case), creating a pending one if unseen."""
    name = _clean_name(name)
    skill = Skill.objects.using(using).filter(name__iexact=name).first()
    if skill:
        return skill
    try:
        with transaction.atomic(using=using):
            skill = Skill.objects.using(using).create(name=name)
    except IntegrityError:
        # another request created it first
        return Skill.objects.using(using).get(name__iexact=name)
    logger.info("new skill %r awaiting moderation", skill.name)
    return skill


def get_skill(skill_id, *, using=DEFAULT_DB_ALIAS):
    try:
        return Skill.objects.using(using).get(pk=skill_id)
    except (Skill.DoesNotExist, ValueError, TypeError):
        raise SkillNotFound()


def skill_status(skill_id, *, using=DEFAULT_DB_ALIAS):
    return SkillStatus(get_skill(skill_id, using=using).status)


def search_skills(term, limit=10, *, using=DEFAULT_DB_ALIAS):
    term = (term or '').strip()
    qs = Skill.objects.using(using).filter(status=SkillStatus.APPROVED)
    if term:
        qs = qs.filter(name__icontains=term)
    return list(qs.order_by('name')[:limit])


def list_user_skills(user_id, *, using=DEFAULT_DB_ALIAS):
    """A user's own offered and wanted skills with their moderation status, as two lists."""
    offered = Skill.objects.using(using).filter(offered_by__user_id=user_id)
    wanted = Skill.objects.using(using).filter(wanted_by__user_id=user_id)
    return list(offered), list(wanted)


def _add_link(model, user_id, name, using):
    skill = resolve_or_create_skill(name, using=using)
    model.objects.using(using).get_or_create(user_id=user_id, skill=skill)
    return skill


def add_offered_skill(user_id, name, *, using=DEFAULT_DB_ALIAS):
    return _add_link(OfferedSkill, user_id, name, using)


def add_wanted_skill(user_id, name, *, using=DEFAULT_DB_ALIAS):
    return _add_link(WantedSkill, user_id, name, using)


def remove_offered_skill(user_id, skill_id, *, using=DEFAULT_DB_ALIAS):
    deleted, _ = OfferedSkill.objects.using(using).filter(user_id=user_id, skill_id=skill_id).delete()
    return deleted > 0


def remove_wanted_skill(user_id, skill_id, *, using=DEFAULT_DB_ALIAS):
    deleted, _ = WantedSkill.objects.using(using).filter(user_id=user_id, skill_id=skill_id).delete()
    return deleted > 0


def moderate_skill(skill_id, status, rejection_reason=None, *, using=DEFAULT_DB_ALIAS):
    if status not in (SkillStatus.APPROVED, SkillStatus.REJECTED):
        raise InvalidModeration('Status must be "approved" or "rejected"')
    if status == SkillStatus.REJECTED and not rejection_reason:
        raise InvalidModeration('Rejection reason is required when rejecting a skill')

    skill = get_skill(skill_id, using=using)
    skill.status = status
    skill.rejection_reason = rejection_reason if status == SkillStatus.REJECTED else ''
    skill.save(using=using, update_fields=['status', 'rejection_reason', 'updated_at'])
    logger.info("skill %s (%s) moderated: %s", skill.pk, skill.name, skill.status)
    return skill

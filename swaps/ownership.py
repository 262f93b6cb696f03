"""
Skill-ownership checks used when a swap is created.
"""
from django.db import DEFAULT_DB_ALIAS, connections
from django.db.models import Q

from skills.models import OfferedSkill, SkillStatus


def validate_skill_ownership(sender_id, offered_skill_id, receiver_id, wanted_skill_id, *, using=DEFAULT_DB_ALIAS):
    """
    Return (sender_offered, receiver_offered): which of the two requested
    skills each user currently offers with an approved directory status.

    Both memberships are read in a single query so they describe the same
    moment. Inside a transaction the matching link rows are also locked,
    so neither side can drop the skill before the swap row is written.
    """
    qs = OfferedSkill.objects.using(using).filter(
        Q(user_id=sender_id, skill_id=offered_skill_id) | Q(user_id=receiver_id, skill_id=wanted_skill_id),
        skill__status=SkillStatus.APPROVED,
    )
    connection = connections[using]
    if not connection.get_autocommit():
        if connection.features.has_select_for_update_of:
            qs = qs.select_for_update(of=('self',))
        else:
            qs = qs.select_for_update()

    sender_offered, receiver_offered = set(), set()
    for user_id, skill_id in qs.values_list('user_id', 'skill_id'):
        if user_id == sender_id and skill_id == offered_skill_id:
            sender_offered.add(skill_id)
        if user_id == receiver_id and skill_id == wanted_skill_id:
            receiver_offered.add(skill_id)
    return sender_offered, receiver_offered


def user_offers_approved_skill(user_id, skill_id, *, using=DEFAULT_DB_ALIAS):
    return OfferedSkill.objects.using(using).filter(
        user_id=user_id, skill_id=skill_id, skill__status=SkillStatus.APPROVED,
    ).exists()

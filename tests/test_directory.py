import pytest

from accounts import directory as users
from core.errors import Forbidden, InvalidModeration, InvalidSkillName, SkillNotFound, UserNotFound
from skills import directory as skills
from skills.models import OfferedSkill, Skill, SkillStatus, WantedSkill
from swaps.ownership import user_offers_approved_skill, validate_skill_ownership

pytestmark = pytest.mark.django_db


# ===================================================================
# Users
# ===================================================================

class TestUsers:
    def test_get_user(self, sender) -> None:
        assert users.get_user(sender.pk) == sender
        assert users.get_user(sender) == sender

    @pytest.mark.parametrize('user_id', [424242, 'nope', None])
    def test_unknown_user(self, user_id) -> None:
        with pytest.raises(UserNotFound):
            users.get_user(user_id)
        assert users.find_user(user_id) is None

    def test_ban_and_unban(self, sender) -> None:
        users.ban_user(sender.pk, 'spam')
        assert users.is_user_banned(sender.pk)
        sender.refresh_from_db()
        assert sender.ban_reason == 'spam'

        users.unban_user(sender.pk)
        assert not users.is_user_banned(sender.pk)
        sender.refresh_from_db()
        assert sender.ban_reason == ''

    def test_admin_cannot_be_banned(self, admin_user) -> None:
        with pytest.raises(Forbidden):
            users.ban_user(admin_user.pk, 'nope')
        assert not users.is_user_banned(admin_user.pk)

    def test_user_offers_skill(self, sender, receiver, guitar) -> None:
        assert users.user_offers_skill(sender.pk, guitar.pk)
        assert not users.user_offers_skill(receiver.pk, guitar.pk)


# ===================================================================
# Skills
# ===================================================================

class TestSkillDirectory:
    def test_new_skill_is_pending(self) -> None:
        skill = skills.resolve_or_create_skill('  Woodworking ')
        assert skill.name == 'Woodworking'
        assert skill.status == SkillStatus.PENDING

    def test_lookup_is_case_insensitive(self, make_skill) -> None:
        existing = make_skill('Guitar')
        assert skills.resolve_or_create_skill('gUiTaR') == existing
        assert Skill.objects.count() == 1

    @pytest.mark.parametrize('name', ['   ', None, 'x' * 101])
    def test_bad_name(self, name) -> None:
        with pytest.raises(InvalidSkillName):
            skills.resolve_or_create_skill(name)
        assert not Skill.objects.exists()

    def test_skill_status(self, make_skill) -> None:
        skill = make_skill('Knitting', status=SkillStatus.REJECTED)
        assert skills.skill_status(skill.pk) is SkillStatus.REJECTED

    def test_unknown_skill(self) -> None:
        with pytest.raises(SkillNotFound):
            skills.get_skill(424242)

    def test_search_only_approved(self, make_skill) -> None:
        make_skill('Guitar')
        make_skill('Bass Guitar')
        make_skill('Guitar Repair', status=SkillStatus.PENDING)
        assert [s.name for s in skills.search_skills('guitar')] == ['Bass Guitar', 'Guitar']

    def test_add_and_remove_links(self, sender) -> None:
        offered = skills.add_offered_skill(sender.pk, 'Pottery')
        skills.add_offered_skill(sender.pk, 'pottery')
        wanted = skills.add_wanted_skill(sender.pk, 'Welding')
        assert OfferedSkill.objects.filter(user=sender).count() == 1
        assert WantedSkill.objects.filter(user=sender, skill=wanted).exists()

        assert skills.remove_offered_skill(sender.pk, offered.pk) is True
        assert skills.remove_offered_skill(sender.pk, offered.pk) is False
        assert skills.remove_wanted_skill(sender.pk, wanted.pk) is True

    def test_list_user_skills_includes_every_status(self, sender, guitar, make_skill) -> None:
        unicycling = skills.add_offered_skill(sender.pk, 'Unicycling')
        rejected = make_skill('Napping', status=SkillStatus.REJECTED)
        WantedSkill.objects.create(user=sender, skill=rejected)

        offered, wanted = skills.list_user_skills(sender.pk)
        assert {s.name: s.status for s in offered} == {'Guitar': 'approved', 'Unicycling': 'pending'}
        assert wanted == [rejected]
        assert unicycling in offered


class TestModeration:
    def test_approve(self, make_skill) -> None:
        skill = skills.moderate_skill(make_skill('Chess', status=SkillStatus.PENDING).pk, SkillStatus.APPROVED)
        assert skill.is_approved
        assert skill.rejection_reason == ''

    def test_reject_needs_reason(self, make_skill) -> None:
        skill = make_skill('Chess', status=SkillStatus.PENDING)
        with pytest.raises(InvalidModeration):
            skills.moderate_skill(skill.pk, SkillStatus.REJECTED)
        rejected = skills.moderate_skill(skill.pk, SkillStatus.REJECTED, 'Too vague')
        assert rejected.status == SkillStatus.REJECTED
        assert rejected.rejection_reason == 'Too vague'

    def test_cannot_move_back_to_pending(self, make_skill) -> None:
        with pytest.raises(InvalidModeration):
            skills.moderate_skill(make_skill('Chess').pk, SkillStatus.PENDING)


# ===================================================================
# Ownership
# ===================================================================

class TestOwnership:
    def test_both_sides_owned(self, sender, receiver, guitar, spanish) -> None:
        assert validate_skill_ownership(sender.pk, guitar.pk, receiver.pk, spanish.pk) == ({guitar.pk}, {spanish.pk})

    def test_swapped_sides_not_counted(self, sender, receiver, guitar, spanish) -> None:
        assert validate_skill_ownership(sender.pk, spanish.pk, receiver.pk, guitar.pk) == (set(), set())

    def test_unapproved_skill_not_counted(self, sender, receiver, guitar, spanish) -> None:
        Skill.objects.filter(pk=spanish.pk).update(status=SkillStatus.REJECTED)
        assert validate_skill_ownership(sender.pk, guitar.pk, receiver.pk, spanish.pk) == ({guitar.pk}, set())
        assert not user_offers_approved_skill(receiver.pk, spanish.pk)
        assert user_offers_approved_skill(sender.pk, guitar.pk)

import pytest
from django.contrib.auth import get_user_model

from skills.models import OfferedSkill, Skill, SkillStatus
from swaps import ledger

User = get_user_model()


@pytest.fixture
def make_user(db):
    def _make(username, role=User.ROLE_USER, is_banned=False, **extra):
        return User.objects.create_user(
            username=username, email=f'{username}@example.com', password='pass12345',
            role=role, is_banned=is_banned, **extra,
        )
    return _make


@pytest.fixture
def make_skill(db):
    def _make(name, status=SkillStatus.APPROVED):
        return Skill.objects.create(name=name, status=status)
    return _make


@pytest.fixture
def offer(db):
    def _offer(user, skill):
        OfferedSkill.objects.create(user=user, skill=skill)
        return skill
    return _offer


@pytest.fixture
def sender(make_user):
    return make_user('sam')


@pytest.fixture
def receiver(make_user):
    return make_user('rosa')


@pytest.fixture
def outsider(make_user):
    return make_user('otto')


@pytest.fixture
def admin_user(make_user):
    return make_user('ada', role=User.ROLE_ADMIN)


@pytest.fixture
def guitar(make_skill, offer, sender):
    return offer(sender, make_skill('Guitar'))


@pytest.fixture
def spanish(make_skill, offer, receiver):
    return offer(receiver, make_skill('Spanish'))


@pytest.fixture
def pending_swap(sender, receiver, guitar, spanish):
    return ledger.create_swap_request(sender.pk, receiver.pk, guitar.pk, spanish.pk, 'Trade lessons?')


@pytest.fixture
def accepted_swap(pending_swap, receiver):
    return ledger.accept_swap_request(pending_swap.pk, receiver.pk)


@pytest.fixture
def completed_swap(accepted_swap, sender):
    return ledger.complete_swap_request(accepted_swap.pk, sender.pk)

"""Authorization checks against fixed, unsaved fixtures. No database access."""

import pytest

from accounts.models import User
from core.errors import (
    ActorBanned, Forbidden, InvalidState, NotParticipant, SelfSwap,
    SkillNotOffered, SkillNotOwned, SwapNotCompleted, UserNotFound,
)
from swaps import guards
from swaps.models import SwapRequest, SwapStatus

SENDER_ID, RECEIVER_ID, OTHER_ID = 1, 2, 3
GUITAR, SPANISH, COOKING = 10, 20, 30


def _user(pk, is_banned=False, role=User.ROLE_USER):
    return User(pk=pk, username=f'user{pk}', is_banned=is_banned, role=role)


def _swap(status=SwapStatus.PENDING):
    return SwapRequest(pk=99, sender_id=SENDER_ID, receiver_id=RECEIVER_ID,
                       offered_skill_id=GUITAR, wanted_skill_id=SPANISH, status=status)


def _create(sender=None, receiver=None, offered=GUITAR, wanted=SPANISH,
            sender_offered=frozenset({GUITAR}), receiver_offered=frozenset({SPANISH})):
    sender = sender or _user(SENDER_ID)
    receiver = receiver if receiver is not None else _user(RECEIVER_ID)
    return guards.check_can_create(sender, receiver, offered, wanted, sender_offered, receiver_offered)


# ===================================================================
# Creation
# ===================================================================

class TestCanCreate:
    def test_valid_request_passes(self) -> None:
        assert _create() is None

    @pytest.mark.parametrize('offered,wanted', [(GUITAR, SPANISH), (None, None), (COOKING, GUITAR)])
    def test_self_swap_regardless_of_skills(self, offered, wanted) -> None:
        me = _user(SENDER_ID)
        with pytest.raises(SelfSwap):
            _create(sender=me, receiver=_user(SENDER_ID), offered=offered, wanted=wanted,
                    sender_offered=set(), receiver_offered=set())

    def test_self_swap_on_raw_ids(self) -> None:
        with pytest.raises(SelfSwap):
            guards.check_not_self(5, '5')

    def test_missing_receiver(self) -> None:
        with pytest.raises(UserNotFound):
            guards.check_can_create(_user(SENDER_ID), None, GUITAR, SPANISH, {GUITAR}, {SPANISH})

    def test_banned_sender(self) -> None:
        with pytest.raises(ActorBanned):
            _create(sender=_user(SENDER_ID, is_banned=True))

    def test_banned_receiver(self) -> None:
        with pytest.raises(ActorBanned):
            _create(receiver=_user(RECEIVER_ID, is_banned=True))

    def test_offered_skill_not_owned(self) -> None:
        with pytest.raises(SkillNotOwned):
            _create(offered=COOKING)

    def test_wanted_skill_not_offered_by_receiver(self) -> None:
        with pytest.raises(SkillNotOffered):
            _create(wanted=COOKING)

    def test_ownership_checked_before_offer(self) -> None:
        with pytest.raises(SkillNotOwned):
            _create(sender_offered=set(), receiver_offered=set())


# ===================================================================
# Transitions
# ===================================================================

class TestAcceptReject:
    @pytest.mark.parametrize('check', [guards.check_can_accept, guards.check_can_reject])
    def test_receiver_allowed(self, check) -> None:
        assert check(_user(RECEIVER_ID), _swap()) is None

    @pytest.mark.parametrize('check', [guards.check_can_accept, guards.check_can_reject])
    @pytest.mark.parametrize('actor_id', [SENDER_ID, OTHER_ID])
    def test_anyone_else_forbidden(self, check, actor_id) -> None:
        with pytest.raises(Forbidden):
            check(_user(actor_id), _swap())

    def test_admin_is_not_receiver(self) -> None:
        with pytest.raises(Forbidden):
            guards.check_can_accept(_user(OTHER_ID, role=User.ROLE_ADMIN), _swap())

    def test_plain_ids_accepted(self) -> None:
        assert guards.check_can_accept(RECEIVER_ID, _swap()) is None

    @pytest.mark.parametrize('check', [guards.check_can_accept, guards.check_can_reject])
    def test_numeric_string_id_is_the_receiver(self, check) -> None:
        assert check(str(RECEIVER_ID), _swap()) is None
        with pytest.raises(Forbidden):
            check(str(SENDER_ID), _swap())

    def test_non_numeric_id_forbidden(self) -> None:
        with pytest.raises(Forbidden):
            guards.check_can_accept('receiver', _swap())


class TestComplete:
    @pytest.mark.parametrize('actor_id', [SENDER_ID, RECEIVER_ID])
    def test_participants_allowed(self, actor_id) -> None:
        assert guards.check_can_complete(_user(actor_id), _swap(SwapStatus.ACCEPTED)) is None

    def test_outsider_forbidden(self) -> None:
        with pytest.raises(Forbidden):
            guards.check_can_complete(_user(OTHER_ID), _swap(SwapStatus.ACCEPTED))


class TestDelete:
    def test_sender_may_delete_pending(self) -> None:
        assert guards.check_can_delete(_user(SENDER_ID), _swap()) is None

    def test_receiver_forbidden(self) -> None:
        with pytest.raises(Forbidden):
            guards.check_can_delete(_user(RECEIVER_ID), _swap())

    @pytest.mark.parametrize('status', [SwapStatus.ACCEPTED, SwapStatus.REJECTED, SwapStatus.COMPLETED])
    def test_only_pending(self, status) -> None:
        with pytest.raises(InvalidState):
            guards.check_can_delete(_user(SENDER_ID), _swap(status))


class TestFeedback:
    @pytest.mark.parametrize('actor_id', [SENDER_ID, RECEIVER_ID])
    def test_participant_on_completed(self, actor_id) -> None:
        assert guards.check_can_give_feedback(_user(actor_id), _swap(SwapStatus.COMPLETED)) is None

    def test_outsider(self) -> None:
        with pytest.raises(NotParticipant):
            guards.check_can_give_feedback(_user(OTHER_ID), _swap(SwapStatus.COMPLETED))

    @pytest.mark.parametrize('status', [SwapStatus.PENDING, SwapStatus.ACCEPTED, SwapStatus.REJECTED])
    def test_not_completed(self, status) -> None:
        with pytest.raises(SwapNotCompleted):
            guards.check_can_give_feedback(_user(SENDER_ID), _swap(status))


class TestView:
    @pytest.mark.parametrize('actor', [_user(SENDER_ID), _user(RECEIVER_ID), _user(OTHER_ID, role=User.ROLE_ADMIN)])
    def test_allowed(self, actor) -> None:
        assert guards.check_can_view(actor, _swap()) is None

    def test_outsider_forbidden(self) -> None:
        with pytest.raises(Forbidden):
            guards.check_can_view(_user(OTHER_ID), _swap())


class TestIdNormalization:
    @pytest.mark.parametrize('value,expected', [(7, 7), ('7', 7), (' 7 ', 7), ('abc', 'abc'), (None, None)])
    def test_normalize(self, value, expected) -> None:
        assert guards.normalize_id(value) == expected

    def test_user_instance(self) -> None:
        assert guards.normalize_id(_user(SENDER_ID)) == SENDER_ID

    def test_string_ids_reach_every_participant_check(self) -> None:
        assert guards.check_can_complete(str(SENDER_ID), _swap(SwapStatus.ACCEPTED)) is None
        assert guards.check_can_delete(str(SENDER_ID), _swap()) is None
        assert guards.check_can_give_feedback(str(RECEIVER_ID), _swap(SwapStatus.COMPLETED)) is None
        assert guards.check_can_view(str(RECEIVER_ID), _swap()) is None

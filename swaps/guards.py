"""
Authorization checks for swap transitions.

Every check looks only at the objects it is handed (ids, status, ban
and role flags) and never queries the database, so each one can be
exercised against unsaved model instances. A check returns None when
the actor may proceed and raises a ``SwapError`` otherwise.
"""
from core.errors import (
    ActorBanned, Forbidden, InvalidState, NotParticipant, SelfSwap,
    SkillNotOffered, SkillNotOwned, SwapNotCompleted, UserNotFound,
)
from .models import SwapStatus


def normalize_id(user_or_id):
    """User instance, int or numeric string -> int; anything else is returned unchanged."""
    value = getattr(user_or_id, 'pk', user_or_id)
    try:
        return int(value)
    except (TypeError, ValueError):
        return value


def is_admin(actor):
    return bool(actor is not None and getattr(actor, 'is_admin', False))


def is_participant(actor, swap):
    return swap.is_participant(normalize_id(actor))


def check_not_self(sender, receiver):
    if normalize_id(sender) == normalize_id(receiver):
        raise SelfSwap()


def check_can_create(sender, receiver, offered_skill_id, wanted_skill_id, sender_offered, receiver_offered):
    """
    sender_offered / receiver_offered are the skill ids each side offers
    (approved only), read from one snapshot by swaps.ownership.
    """
    if receiver is None:
        raise UserNotFound('Receiver not found')
    check_not_self(sender, receiver)
    if sender.is_banned:
        raise ActorBanned('Your account is banned')
    if receiver.is_banned:
        raise ActorBanned('Receiver is banned')
    if offered_skill_id not in sender_offered:
        raise SkillNotOwned()
    if wanted_skill_id not in receiver_offered:
        raise SkillNotOffered()


def check_can_view(actor, swap):
    if not is_participant(actor, swap) and not is_admin(actor):
        raise Forbidden('Not authorized to view this swap request')


def _check_receiver(actor, swap, verb):
    if normalize_id(actor) != swap.receiver_id:
        raise Forbidden(f'Only the receiver can {verb} a swap request')


def check_can_accept(actor, swap):
    _check_receiver(actor, swap, 'accept')


def check_can_reject(actor, swap):
    _check_receiver(actor, swap, 'reject')


def check_can_complete(actor, swap):
    if not is_participant(actor, swap):
        raise Forbidden('Only participants can mark a swap as completed')


def check_can_delete(actor, swap):
    if normalize_id(actor) != swap.sender_id:
        raise Forbidden('Only the sender can delete a swap request')
    if swap.status != SwapStatus.PENDING:
        raise InvalidState('Only pending swap requests can be deleted')


def check_can_give_feedback(actor, swap):
    if not is_participant(actor, swap):
        raise NotParticipant()
    if swap.status != SwapStatus.COMPLETED:
        raise SwapNotCompleted()


CHECKS = {
    'accept': check_can_accept,
    'reject': check_can_reject,
    'complete': check_can_complete,
}

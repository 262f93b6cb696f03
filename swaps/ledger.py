"""
Swap ledger: creation, reads and status transitions of swap requests.

Status changes are conditional updates (``UPDATE ... WHERE id = ? AND
status = <expected>``); when the row no longer has the expected status
the transition fails with ``Conflict`` instead of overwriting whatever
another request wrote in the meantime.

Every function takes the database alias as ``using``.
"""
import logging

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, transaction
from django.db.models import Q
from django.utils import timezone

from accounts.directory import find_user, get_user
from core.errors import Conflict, InvalidMessage, InvalidState, InvalidStatus, SwapNotFound
from core.pagination import as_int, paginate
from . import guards
from .models import TRANSITIONS, SwapRequest, SwapStatus
from .ownership import validate_skill_ownership

logger = logging.getLogger(__name__)

RELATED = ('sender', 'receiver', 'offered_skill', 'wanted_skill')


def _clean_message(message):
    message = (message or '').strip()
    max_length = settings.SWAP_MESSAGE_MAX_LENGTH
    if len(message) > max_length:
        raise InvalidMessage(f'Message must be at most {max_length} characters')
    return message


def _status_filter(status):
    if not status:
        return None
    if status not in SwapStatus.values:
        raise InvalidStatus(f'Status must be one of: {", ".join(SwapStatus.values)}')
    return status


# --- CREATE ---
def create_swap_request(sender_id, receiver_id, offered_skill_id, wanted_skill_id, message=None, *, using=DEFAULT_DB_ALIAS):
    guards.check_not_self(sender_id, receiver_id)
    message = _clean_message(message)
    offered_skill_id = as_int(offered_skill_id)
    wanted_skill_id = as_int(wanted_skill_id)

    sender = get_user(sender_id, using=using)
    with transaction.atomic(using=using):
        receiver = find_user(receiver_id, using=using)
        sender_offered, receiver_offered = set(), set()
        if receiver is not None:
            sender_offered, receiver_offered = validate_skill_ownership(
                sender.pk, offered_skill_id, receiver.pk, wanted_skill_id, using=using,
            )
        guards.check_can_create(sender, receiver, offered_skill_id, wanted_skill_id, sender_offered, receiver_offered)

        now = timezone.now()
        swap = SwapRequest.objects.using(using).create(
            sender=sender,
            receiver=receiver,
            offered_skill_id=offered_skill_id,
            wanted_skill_id=wanted_skill_id,
            message=message,
            status=SwapStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
    logger.info("swap %s created by %s for %s", swap.pk, sender.pk, receiver.pk)
    return get_swap_request(swap.pk, using=using)


# --- READ ---
def get_swap_request(swap_id, *, using=DEFAULT_DB_ALIAS):
    swap_id = as_int(swap_id)
    if swap_id is None:
        raise SwapNotFound()
    try:
        return SwapRequest.objects.using(using).select_related(*RELATED).get(pk=swap_id)
    except SwapRequest.DoesNotExist:
        raise SwapNotFound()


def list_swap_requests(user_id, status=None, page=1, limit=None, *, using=DEFAULT_DB_ALIAS):
    """Swaps where the user is sender or receiver, newest first."""
    status = _status_filter(status)
    qs = SwapRequest.objects.using(using).select_related(*RELATED).filter(
        Q(sender_id=user_id) | Q(receiver_id=user_id)
    )
    if status:
        qs = qs.filter(status=status)
    return paginate(qs, page, limit, settings.SWAP_PAGE_SIZE)


def list_all_swap_requests(status=None, user_id=None, page=1, limit=None, *, using=DEFAULT_DB_ALIAS):
    """Admin view over every swap, optionally narrowed to one user."""
    status = _status_filter(status)
    qs = SwapRequest.objects.using(using).select_related(*RELATED)
    if status:
        qs = qs.filter(status=status)
    user_id = as_int(user_id)
    if user_id:
        qs = qs.filter(Q(sender_id=user_id) | Q(receiver_id=user_id))
    return paginate(qs, page, limit, settings.SWAP_PAGE_SIZE * 2)


# --- TRANSITIONS ---
def _transition(swap_id, actor_id, action, using):
    actor_id = guards.normalize_id(actor_id)
    swap = get_swap_request(swap_id, using=using)
    guards.CHECKS[action](actor_id, swap)

    source, target = TRANSITIONS[action]
    if swap.status != source:
        logger.debug("swap %s: cannot %s from %s", swap.pk, action, swap.status)
        raise InvalidState(f'Cannot {action} a swap request that is {swap.status}')

    updated = SwapRequest.objects.using(using).filter(pk=swap.pk, status=source).update(
        status=target, updated_at=timezone.now(),
    )
    if not updated:
        if not SwapRequest.objects.using(using).filter(pk=swap.pk).exists():
            raise SwapNotFound()
        logger.warning("swap %s: %s lost a race (expected %s)", swap.pk, action, source)
        raise Conflict()

    logger.info("swap %s: %s -> %s by %s", swap.pk, source, target, actor_id)
    return get_swap_request(swap.pk, using=using)


def accept_swap_request(swap_id, actor_id, *, using=DEFAULT_DB_ALIAS):
    return _transition(swap_id, actor_id, 'accept', using)


def reject_swap_request(swap_id, actor_id, *, using=DEFAULT_DB_ALIAS):
    return _transition(swap_id, actor_id, 'reject', using)


def complete_swap_request(swap_id, actor_id, *, using=DEFAULT_DB_ALIAS):
    # either participant may complete alone; the other side is not asked to confirm
    return _transition(swap_id, actor_id, 'complete', using)


# --- DELETE ---
def delete_swap_request(swap_id, actor_id, *, using=DEFAULT_DB_ALIAS):
    actor_id = guards.normalize_id(actor_id)
    swap = get_swap_request(swap_id, using=using)
    guards.check_can_delete(actor_id, swap)

    deleted, _ = SwapRequest.objects.using(using).filter(
        pk=swap.pk, sender_id=swap.sender_id, status=SwapStatus.PENDING,
    ).delete()
    if not deleted:
        if not SwapRequest.objects.using(using).filter(pk=swap.pk).exists():
            raise SwapNotFound()
        logger.warning("swap %s: delete lost a race", swap.pk)
        raise Conflict()

    logger.info("swap %s deleted by %s", swap.pk, actor_id)
    return True

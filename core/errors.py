"""
Structured errors raised by the swap ledger and its collaborators.
Views turn them into the JSON error envelope; anything else
(database trouble etc.) is left to propagate.
"""


class SwapError(Exception):
    code = 'error'
    status_code = 400
    default_message = 'Request could not be processed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_dict(self):
        return {'success': False, 'code': self.code, 'error': self.message}


# --- NOT FOUND ---
class NotFound(SwapError):
    code = 'not_found'
    status_code = 404
    default_message = 'Not found'


class SwapNotFound(NotFound):
    code = 'swap_not_found'
    default_message = 'Swap request not found'


class UserNotFound(NotFound):
    code = 'user_not_found'
    default_message = 'User not found'


class SkillNotFound(NotFound):
    code = 'skill_not_found'
    default_message = 'Skill not found'


# --- AUTHORIZATION ---
class Forbidden(SwapError):
    code = 'forbidden'
    status_code = 403
    default_message = 'Not authorized to perform this action'


class ActorBanned(SwapError):
    code = 'actor_banned'
    status_code = 403
    default_message = 'Banned users cannot take part in new swaps'


class NotParticipant(SwapError):
    code = 'not_participant'
    status_code = 403
    default_message = 'Only participants can add feedback'


# --- STATE MACHINE ---
class InvalidState(SwapError):
    code = 'invalid_state'
    status_code = 409
    default_message = 'Action is not allowed in the current status'


class Conflict(InvalidState):
    """The row changed under us between the read and the conditional write."""
    code = 'conflict'
    default_message = 'Swap request was modified by another request'


class SwapNotCompleted(SwapError):
    code = 'swap_not_completed'
    status_code = 409
    default_message = 'Feedback can only be added to completed swaps'


class DuplicateFeedback(SwapError):
    code = 'duplicate_feedback'
    status_code = 409
    default_message = 'You have already left feedback for this swap'


# --- VALIDATION ---
class SelfSwap(SwapError):
    code = 'self_swap'
    default_message = 'You cannot create a swap request with yourself'


class SkillNotOwned(SwapError):
    code = 'skill_not_owned'
    default_message = 'Offered skill does not belong to you'


class SkillNotOffered(SwapError):
    code = 'skill_not_offered'
    default_message = 'Wanted skill is not offered by the receiver'


class InvalidRating(SwapError):
    code = 'invalid_rating'
    default_message = 'Rating must be an integer between 1 and 5'


class InvalidMessage(SwapError):
    code = 'invalid_message'
    default_message = 'Message is too long'


class InvalidStatus(SwapError):
    code = 'invalid_status'
    default_message = 'Unknown status'


class InvalidSkillName(SwapError):
    code = 'invalid_skill_name'
    default_message = 'Skill name is required'


class InvalidModeration(SwapError):
    code = 'invalid_moderation'
    default_message = 'Invalid moderation request'

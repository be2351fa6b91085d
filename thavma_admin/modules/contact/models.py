"""
Contact message schema and status transitions.
"""

from enum import Enum

from ...core.errors import ValidationError


class MessageStatus(str, Enum):
    UNREAD = 'unread'
    READ = 'read'
    RESPONDED = 'responded'

    @classmethod
    def parse(cls, value):
        try:
            return cls(value)
        except ValueError:
            allowed = ', '.join(s.value for s in cls)
            raise ValidationError(f'status must be one of {allowed}', 'status') from None


_ORDER = [MessageStatus.UNREAD, MessageStatus.READ, MessageStatus.RESPONDED]


def is_forward_transition(current, new):
    """True when `new` is the same as or later than `current` (unread -> read -> responded)"""
    return _ORDER.index(MessageStatus(new)) >= _ORDER.index(MessageStatus(current))


def _clean(value):
    if value is None:
        return None
    return str(value).strip()


def validate_message(data):
    """Return cleaned name/email/phone/message or raise ValidationError"""
    cleaned = {}
    for field in ('name', 'email', 'message'):
        value = _clean(data.get(field))
        if not value:
            raise ValidationError(f'{field} is required', field)
        cleaned[field] = value

    cleaned['email'] = cleaned['email'].lower()
    cleaned['phone'] = _clean(data.get('phone')) or None
    return cleaned

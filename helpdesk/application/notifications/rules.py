"""Which users receive which event.

Business mutations describe *what* happened through a
:class:`RecipientContext`; the mapping below decides *who* hears about it.
The dispatcher never makes that decision.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from helpdesk.domain.entities import Ticket
from helpdesk.infrastructure.realtime import unique_recipients

# Realtime-only events pushed to live sessions.
TICKET_CREATED_EVENT = "ticket:created"
TICKET_UPDATED_EVENT = "ticket:updated"
COMMENT_ADDED_EVENT = "comment:added"

# Durable notification types.
TICKET_ASSIGNED = "TICKET_ASSIGNED"
COMMENT_ADDED = "COMMENT_ADDED"
STATUS_CHANGED = "STATUS_CHANGED"


@dataclass(frozen=True)
class RecipientContext:
    """Facts about a ticket mutation needed to derive its audience."""

    ticket: Ticket
    actor_id: int | None = None
    admin_ids: Sequence[int] = ()


Selector = Callable[[RecipientContext], Iterable[int | None]]
RecipientRule = Callable[[RecipientContext], list[int]]


def creator(context: RecipientContext) -> Iterable[int | None]:
    return (context.ticket.creator_id,)


def assignee(context: RecipientContext) -> Iterable[int | None]:
    return (context.ticket.assignee_id,)


def admins(context: RecipientContext) -> Iterable[int | None]:
    return context.admin_ids


def rule(*selectors: Selector, exclude_actor: bool = False) -> RecipientRule:
    """Combine ``selectors`` into an ordered, duplicate-free recipient rule."""

    def derive(context: RecipientContext) -> list[int]:
        candidates: list[int | None] = []
        for selector in selectors:
            candidates.extend(selector(context))
        recipients = unique_recipients(candidates)
        if exclude_actor and context.actor_id is not None:
            recipients = [recipient for recipient in recipients if recipient != context.actor_id]
        return recipients

    return derive


RECIPIENT_RULES: Mapping[str, RecipientRule] = MappingProxyType(
    {
        TICKET_CREATED_EVENT: rule(admins, assignee),
        TICKET_UPDATED_EVENT: rule(creator, assignee),
        COMMENT_ADDED_EVENT: rule(creator, assignee, exclude_actor=True),
        TICKET_ASSIGNED: rule(assignee),
        COMMENT_ADDED: rule(creator, assignee, exclude_actor=True),
        STATUS_CHANGED: rule(creator, exclude_actor=True),
    }
)


def recipients_for(event_type: str, context: RecipientContext) -> list[int]:
    """Return the users that must receive ``event_type``."""

    try:
        derive = RECIPIENT_RULES[event_type]
    except KeyError as exc:
        raise ValueError(f"No recipient rule for event type {event_type!r}") from exc
    return derive(context)


__all__ = [
    "COMMENT_ADDED",
    "COMMENT_ADDED_EVENT",
    "RECIPIENT_RULES",
    "RecipientContext",
    "STATUS_CHANGED",
    "TICKET_ASSIGNED",
    "TICKET_CREATED_EVENT",
    "TICKET_UPDATED_EVENT",
    "recipients_for",
    "rule",
]

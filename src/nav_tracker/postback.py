"""ASP.NET WebForms postback state extraction.

Provides:
- PageFormState: the hidden-field state needed to request the next page
- extract_form_state: pure function reading that state from page HTML

A postback replays the page's opaque tokens (__VIEWSTATE,
__EVENTVALIDATION, __VIEWSTATEGENERATOR) together with every other
hidden input, and names the control being "clicked" in __EVENTTARGET.
The tokens are single-use and page-order-dependent.
"""

import logging
from dataclasses import dataclass, field

from nav_tracker.markup import find_next_target, form_inputs

logger = logging.getLogger(__name__)

EVENT_TARGET = "__EVENTTARGET"
EVENT_ARGUMENT = "__EVENTARGUMENT"
VIEW_STATE = "__VIEWSTATE"
EVENT_VALIDATION = "__EVENTVALIDATION"
VIEW_STATE_GENERATOR = "__VIEWSTATEGENERATOR"

# Always supplied by the caller, never taken from scraped inputs.
RESERVED_FIELDS = frozenset({EVENT_TARGET, EVENT_ARGUMENT})

# Captured into dedicated PageFormState attributes.
STATE_FIELDS = frozenset({VIEW_STATE, EVENT_VALIDATION, VIEW_STATE_GENERATOR})


@dataclass(frozen=True)
class PageFormState:
    """Postback state scraped from one page, consumed by one POST."""

    event_target: str | None
    view_state: str
    event_validation: str
    view_state_generator: str | None = None
    event_argument: str = ""
    extra_hidden_fields: dict[str, str] = field(default_factory=dict)

    @property
    def has_target(self) -> bool:
        return bool(self.event_target)

    def to_post_fields(self) -> dict[str, str]:
        """Serialize into the ordered form body of the next postback.

        Reserved and state fields come first, then every other hidden
        input in page order. Each name appears once.

        Raises:
            ValueError: If the "Next" postback target was not resolved.
        """
        if not self.event_target:
            raise ValueError("Cannot build a postback without an event target")

        fields = {
            EVENT_TARGET: self.event_target,
            EVENT_ARGUMENT: self.event_argument,
            VIEW_STATE: self.view_state,
            EVENT_VALIDATION: self.event_validation,
        }
        if self.view_state_generator is not None:
            fields[VIEW_STATE_GENERATOR] = self.view_state_generator
        for name, value in self.extra_hidden_fields.items():
            fields.setdefault(name, value)
        return fields


def extract_form_state(html: str) -> PageFormState | None:
    """Read the postback state needed to request the page after this one.

    Pure function: HTML string in, PageFormState (or None) out.

    Returns:
        PageFormState, with ``event_target`` None when no "Next" postback
        target could be resolved. None when __VIEWSTATE or
        __EVENTVALIDATION is absent: the page cannot be paginated further.
    """
    inputs = form_inputs(html)

    state_values: dict[str, str] = {}
    for item in inputs:
        if item.name in STATE_FIELDS:
            state_values.setdefault(item.name, item.value)

    view_state = state_values.get(VIEW_STATE)
    event_validation = state_values.get(EVENT_VALIDATION)
    if view_state is None or event_validation is None:
        logger.debug(
            "Missing postback state (viewstate=%s, eventvalidation=%s)",
            view_state is not None, event_validation is not None,
        )
        return None

    extra: dict[str, str] = {}
    for item in inputs:
        if not item.hidden:
            continue
        if item.name in RESERVED_FIELDS or item.name in STATE_FIELDS:
            continue
        extra.setdefault(item.name, item.value)

    return PageFormState(
        event_target=find_next_target(html),
        view_state=view_state,
        event_validation=event_validation,
        view_state_generator=state_values.get(VIEW_STATE_GENERATOR),
        extra_hidden_fields=extra,
    )

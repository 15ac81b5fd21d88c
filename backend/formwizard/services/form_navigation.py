"""
Step-to-step dispatch for the three-step form.

Every POST to a form step is resolved here from three inputs that all come
from the request itself:
- the step (URL path segment)
- the action (which submit button was pressed)
- the request mode (htmx headers)

Nothing is stored between requests; the outcome only says what the HTTP layer
should send back.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Union

from formwizard.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)

HX_REQUEST_HEADER = "HX-Request"
HX_BOOSTED_HEADER = "HX-Boosted"
HX_REDIRECT_HEADER = "HX-Redirect"


class Step(str, Enum):
    """Form steps, in order"""
    ONE = "one"
    TWO = "two"
    THREE = "three"


class Action(str, Enum):
    """Submit buttons; the form field name equals its value"""
    NEXT = "next"
    CANCEL = "cancel"
    PREV = "prev"
    SUBMIT = "submit"


# Valid actions per step. Order matters: when a form carries several, the first wins.
STEP_ACTIONS: Dict[Step, Tuple[Action, ...]] = {
    Step.ONE: (Action.NEXT, Action.CANCEL),
    Step.TWO: (Action.NEXT, Action.PREV),
    Step.THREE: (Action.SUBMIT, Action.PREV),
}


@dataclass(frozen=True)
class RequestMode:
    is_fragment_request: bool = False
    is_boosted: bool = False

    @property
    def boosted(self) -> bool:
        """Both htmx flags set: answer with a fragment instead of navigating"""
        return self.is_fragment_request and self.is_boosted

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RequestMode":
        return cls(
            is_fragment_request=headers.get(HX_REQUEST_HEADER) == "true",
            is_boosted=headers.get(HX_BOOSTED_HEADER) == "true",
        )


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Render:
    """Render a view inline in the current response"""
    kind: ClassVar[str] = "render"
    view: str
    data: Dict[str, Any] = field(default_factory=dict)
    status_code: int = 200


@dataclass(frozen=True)
class Redirect:
    """Standard See Other redirect"""
    kind: ClassVar[str] = "redirect"
    path: str
    status_code: int = 303


@dataclass(frozen=True)
class InlineRedirect:
    """200 with an HX-Redirect header; htmx performs the navigation client-side"""
    kind: ClassVar[str] = "inline_redirect"
    path: str
    status_code: int = 200


@dataclass(frozen=True)
class BadRequest:
    kind: ClassVar[str] = "bad_request"
    status_code: int = 400


Outcome = Union[Render, Redirect, InlineRedirect, BadRequest]


@dataclass(frozen=True)
class Transition:
    """
    Where a (step, action) pair leads.

    `path` is the full-page destination. `fragment` is the view swapped in for
    boosted requests; without one, boosted requests get an inline redirect.
    """
    path: str
    fragment: Optional[str] = None


TRANSITIONS: Dict[Tuple[Step, Action], Transition] = {
    (Step.ONE, Action.NEXT): Transition("/form/two", fragment="form-two"),
    (Step.ONE, Action.CANCEL): Transition("/"),
    (Step.TWO, Action.NEXT): Transition("/form/three", fragment="form-three"),
    (Step.TWO, Action.PREV): Transition("/form/one", fragment="form-one"),
    (Step.THREE, Action.SUBMIT): Transition("/form/submitted"),
    (Step.THREE, Action.PREV): Transition("/form/two", fragment="form-two"),
}


def _check_transitions() -> None:
    expected = {(step, action) for step, actions in STEP_ACTIONS.items() for action in actions}
    missing = set(Step) - set(STEP_ACTIONS)
    if missing:
        raise RuntimeError(f"Steps without actions: {sorted(s.value for s in missing)}")
    if set(TRANSITIONS) != expected:
        diff = sorted(f"{s.value}:{a.value}" for s, a in set(TRANSITIONS) ^ expected)
        raise RuntimeError(f"Transition table does not match step actions: {diff}")


_check_transitions()


def parse_step(value: str) -> Optional[Step]:
    try:
        return Step(value)
    except ValueError:
        return None


def parse_action(step: Step, form: Mapping[str, Any]) -> Optional[Action]:
    """Action whose field carries its own name as value, e.g. ``next=next``"""
    for action in STEP_ACTIONS[step]:
        if form.get(action.value) == action.value:
            return action
    return None


def dispatch(step: Step, action: Optional[Action], mode: RequestMode) -> Outcome:
    """Resolve a form submission to its outcome"""
    transition = TRANSITIONS.get((step, action)) if action is not None else None

    if transition is None:
        outcome: Outcome = BadRequest()
    elif not mode.boosted:
        outcome = Redirect(transition.path)
    elif transition.fragment is not None:
        outcome = Render(transition.fragment)
    else:
        outcome = InlineRedirect(transition.path)

    logger.debug(
        "Form navigation resolved",
        extra={
            "step": step.value,
            "action": action.value if action is not None else None,
            "boosted": mode.boosted,
            "outcome": outcome.kind,
        }
    )
    return outcome

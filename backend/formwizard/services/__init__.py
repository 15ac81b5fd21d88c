"""
Services layer.

`form_navigation` holds the step/action dispatch table; it has no HTTP or
template dependencies so it can be exercised directly.
"""
from formwizard.services.form_navigation import (Action,  # noqa: F401
                                                 BadRequest, InlineRedirect,
                                                 Outcome, Redirect, Render,
                                                 RequestMode, Step, dispatch,
                                                 parse_action, parse_step)

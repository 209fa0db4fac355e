from typing import Any, Dict, List, Optional

from django.shortcuts import redirect, render

from ..services.outcomes import Outcome, Redirect


def breadcrumbs(*crumbs) -> List[Dict[str, Any]]:
    """Build breadcrumb entries from (label, href) pairs; the last one is active."""
    return [
        {"label": label, "href": href, "active": index == len(crumbs) - 1}
        for index, (label, href) in enumerate(crumbs)
    ]


def respond_with_outcome(request, outcome: Outcome, template: str, context: Optional[Dict[str, Any]] = None):
    """Follow a Redirect, or re-render the form with the returned state."""
    if isinstance(outcome, Redirect):
        return redirect(outcome.path)
    return render(request, template, {
        **(context or {}),
        "state": outcome,
        "form_data": request.POST,
    })


def page_number(request) -> int:
    try:
        return max(int(request.GET.get("page", 1)), 1)
    except (TypeError, ValueError):
        return 1

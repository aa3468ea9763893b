from __future__ import annotations

from fastapi import HTTPException, Request

from session import SessionTracker


def get_tracker(request: Request) -> SessionTracker:
    """
    Resolve the practice tracker bound to this app (``app.state.tracker``).
    """
    tracker = getattr(request.app.state, "tracker", None)
    if tracker is None:
        raise HTTPException(status_code=500, detail="Practice session not configured on server.")
    return tracker

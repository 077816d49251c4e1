"""Translate service error codes into HTTP errors."""

from __future__ import annotations

from fastapi import HTTPException

CONFLICT_CODES = frozenset(
    {
        "already_admin",
        "already_invited",
        "already_member",
        "schedule_exists",
        "season_has_results",
        "team_has_results",
        "team_name_taken",
    }
)
FORBIDDEN_CODES = frozenset({"cannot_remove_captain", "cannot_revoke_self"})


def http_error(exc: ValueError) -> HTTPException:
    """Map a service ValueError to the matching HTTPException.

    ``*_not_found`` codes become 404, conflicts 409, forbidden actions 403 and
    everything else (bad input, invalid schedules, negative sets) 400.
    """
    code = str(exc)
    if code.endswith("_not_found"):
        status = 404
    elif code in CONFLICT_CODES:
        status = 409
    elif code in FORBIDDEN_CODES:
        status = 403
    else:
        status = 400
    return HTTPException(status_code=status, detail=code)

from flask import request, abort
from datetime import timezone
from dateutil.parser import parse, ParserError


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware (UTC if naive) and drop sub-second
    precision, since HTTP dates only carry whole seconds.
    """
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.replace(microsecond=0)


def enforce_optimistic_lock(block):
    """
    Rejects the write with 409 when the block changed after the
    If-Unmodified-Since timestamp the client sent.
    """
    client_ts = request.headers.get("If-Unmodified-Since")
    if not client_ts or block.updated_at is None:
        return

    try:
        client_ts = normalize_ts(parse(client_ts))
    except (ParserError, OverflowError):
        abort(400, description="Invalid If-Unmodified-Since header")

    if normalize_ts(block.updated_at) > client_ts:
        abort(
            409,
            description="Conflict detected. Block has been modified."
        )

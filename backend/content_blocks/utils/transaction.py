from contextlib import contextmanager
from flask import current_app
from content_blocks.extensions import db


@contextmanager
def transactional():
    """
    Commit on success; roll back and re-raise on any error so a rejected
    block write leaves nothing behind.
    """
    try:
        yield
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.debug("Rolled back block transaction: %s", exc)
        raise

# backend/utils/audit.py
import logging
from typing import Optional

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.log import Log

logger = logging.getLogger(__name__)


def client_ip(request: Optional[Request]) -> Optional[str]:
    if request is None or request.client is None:
        return None
    return request.client.host


def write_log(db: Session, *, user_id, action, resource, status="SUCCESS", request=None, meta=None):
    entry = Log(user_id=user_id, action=action, resource=resource, status=status,
                ip=client_ip(request), meta=meta or {})
    try:
        db.add(entry)
        db.commit()
    except SQLAlchemyError as e:
        # The audited action has already been committed at this point
        db.rollback()
        logger.exception("Failed to write audit log %s/%s: %s", resource, action, e)

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ecommerce_portal.core.database import get_db
from ecommerce_portal.deps import require_admin
from ecommerce_portal.schemas.activity_log import ActivityLogOut
from ecommerce_portal.services.activity_log import DEFAULT_LIST_LIMIT, activity_log_to_dict, list_recent
from ecommerce_portal.services.auth import Principal

router = APIRouter(prefix="/activity-log", tags=["activity-log"])


@router.get("/all", response_model=List[ActivityLogOut])
def list_activity_logs(
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=1000),
    db: Session = Depends(get_db),
    _admin: Principal = Depends(require_admin),
):
    return [activity_log_to_dict(entry) for entry in list_recent(db, limit)]

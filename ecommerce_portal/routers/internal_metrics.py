from __future__ import annotations

from fastapi import APIRouter, Depends

from ecommerce_portal.core.metrics import request_metrics
from ecommerce_portal.deps import require_admin
from ecommerce_portal.services.auth import Principal

router = APIRouter(prefix="/internal/metrics", tags=["internal-metrics"])


@router.get("")
def endpoint_metrics(_admin: Principal = Depends(require_admin)):
    return {"endpoints": request_metrics.snapshot()}

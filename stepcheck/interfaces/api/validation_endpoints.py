import logging
import time
from typing import Any, Dict, Optional

from fastapi import APIRouter

from stepcheck.diagnostics.markers import build_diagnostics
from stepcheck.dsl.dsl_model import StateType
from stepcheck.interfaces.api.schemas import ValidationRequest, ValidationResponse
from stepcheck.observability.prometheus_metrics import record_run

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/validation", tags=["validation"])

# ----------- 通用返回封装 -----------

def standard_response(
    status: str = "ok",
    data: Optional[Any] = None,
    message: Optional[str] = None
) -> Dict[str, Any]:
    return {"status": status, "data": data, "message": message}

# ----------- 接口定义 -----------

@router.post("/", response_model=ValidationResponse)
def validate_definition_text(request: ValidationRequest):
    started = time.perf_counter()
    diagnostics = build_diagnostics(request.text, request.format)
    summary = diagnostics.summary

    record_run(
        summary.error_count,
        summary.warning_count,
        summary.parse_error is not None,
        time.perf_counter() - started,
    )
    logger.info(
        "validated %d chars of %s: %s (%d error(s), %d warning(s))",
        len(request.text), request.format, summary.status,
        summary.error_count, summary.warning_count,
    )
    return standard_response(
        data=diagnostics,
        message=f"{summary.error_count} error(s), {summary.warning_count} warning(s)",
    )


@router.get("/state-types", response_model=Dict[str, Any])
async def list_state_types():
    return standard_response(data=[t.value for t in StateType])

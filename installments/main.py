import logging

from fastapi import FastAPI, HTTPException

from . import config
from .models import (
    DescribeRequest,
    DescribeResponse,
    HealthResponse,
    NormalizeRequest,
    NormalizeResponse,
    PlanRequest,
    PlanResponse,
    RemovalRequest,
    RemovalResponse,
)
from .normalize import classify, format_installment, normalize
from .plan import build_installment_plan
from .series import (
    SettledTransactionError,
    is_multi_installment,
    select_removal_ids,
    strip_installment_suffix,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=config.API_TITLE,
    description="Tolerant parcela_info normalization for transaction records",
    version=config.API_VERSION,
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/normalize", response_model=NormalizeResponse)
def normalize_installment(body: NormalizeRequest):
    descriptor = normalize(body.raw)
    return {
        "shape": classify(body.raw).shape.value,
        "descriptor": descriptor.to_wire() if descriptor else None,
        "display": format_installment(body.raw),
    }

@app.post("/describe", response_model=DescribeResponse)
def describe(body: DescribeRequest):
    return {"description": body.description, "base": strip_installment_suffix(body.description)}

@app.post("/series/removal", response_model=RemovalResponse)
def series_removal(body: RemovalRequest):
    try:
        ids = select_removal_ids(body.transaction, body.candidates, body.scope)
    except SettledTransactionError as exc:
        logger.info("refused removal of settled transaction %s", body.transaction.get("id"))
        raise HTTPException(status_code=409, detail=str(exc))

    return {
        "ids": ids,
        "multi_installment": is_multi_installment(body.transaction),
        "recurring": bool(body.transaction.get("recorrente")),
    }

@app.post("/plan", response_model=PlanResponse)
def plan(body: PlanRequest):
    try:
        rows = build_installment_plan(body.total_amount, body.count, body.first_due_date)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return {"rows": rows}

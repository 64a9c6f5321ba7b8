"""POST /v1/roundup - Round-up simulator endpoint"""

import logging
from fastapi import APIRouter, HTTPException

from roundup_gateway.api.v1.schemas import RoundUpRequest, RoundUpResponse
from roundup_gateway.config import settings
from roundup_gateway.domain.exceptions import InvalidAmountError
from roundup_gateway.domain.roundup import round_up
from roundup_gateway.infrastructure.observability.metrics import roundup_amount_histogram

router = APIRouter()


@router.post("/roundup", response_model=RoundUpResponse)
def calculate_roundup(request_body: RoundUpRequest):
    """
    Spare change to the next multiple of the configured denomination.

    Non-positive amounts are rejected with 400.
    """
    try:
        amount = round_up(request_body.amount, settings.roundup_denomination)
    except InvalidAmountError as e:
        logging.warning(f"Invalid round-up amount: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    roundup_amount_histogram.observe(float(amount))
    return RoundUpResponse(round_up_amount=float(amount))

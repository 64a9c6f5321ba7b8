"""GET /v1/income-prediction - Income trend and weekly forecast endpoint"""

import time
import logging
import random
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from roundup_gateway.api.dependencies import get_advisor_client, get_forecast_rng, get_request_id
from roundup_gateway.api.v1.schemas import IncomePointSchema, IncomePredictionResponse
from roundup_gateway.config import settings
from roundup_gateway.domain.forecasting import forecast
from roundup_gateway.infrastructure.clients.advisor import AdvisorClient
from roundup_gateway.infrastructure.database.repositories import TransactionRepository
from roundup_gateway.infrastructure.database.session import get_db
from roundup_gateway.infrastructure.observability.logging import log_prediction
from roundup_gateway.infrastructure.observability.metrics import record_forecast
from roundup_gateway.utils.date_utils import days_ago

router = APIRouter()


@router.get("/income-prediction", response_model=IncomePredictionResponse)
async def get_income_prediction(
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
    advisor: AdvisorClient = Depends(get_advisor_client),
    rng: random.Random = Depends(get_forecast_rng),
):
    """
    Classify the user's recent income trend and project it forward.

    Uses income transactions from the last 90 days. Fewer than 4 of them
    yields an empty forecast with the trend still reported.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        historical = TransactionRepository(db).get_income_series(
            user_id, since=days_ago(settings.income_lookback_days)
        )
    except SQLAlchemyError as e:
        logging.error(f"Error fetching income data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to fetch income data")

    prediction = forecast(historical, periods=settings.forecast_periods, rng=rng)
    prediction.explanation = await advisor.forecast_explanation(
        prediction.historical, prediction.forecast, prediction.trend
    )

    duration_ms = (time.time() - start_time) * 1000
    record_forecast(prediction.trend)
    log_prediction(
        request_id,
        user_id,
        len(prediction.historical),
        len(prediction.forecast),
        prediction.trend,
        duration_ms,
    )

    return IncomePredictionResponse(
        historical=[IncomePointSchema(date=p.date, amount=float(p.amount)) for p in prediction.historical],
        forecast=[IncomePointSchema(date=p.date, amount=float(p.amount)) for p in prediction.forecast],
        trend=prediction.trend,
        explanation=prediction.explanation,
    )

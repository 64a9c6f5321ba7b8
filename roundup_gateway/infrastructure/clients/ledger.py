"""Savings ledger webhook client with exponential backoff retry logic"""

import asyncio
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict

import httpx

from roundup_gateway.config import settings
from roundup_gateway.infrastructure.observability.metrics import webhook_latency_histogram, webhook_failure_counter

logger = logging.getLogger(__name__)


def roundup_saved_event(
    transaction_id: str,
    user_id: str,
    amount: Decimal,
    round_up_amount: Decimal,
    txn_date: date,
) -> Dict[str, Any]:
    """Payload announcing that a round-up was moved into savings"""
    return {
        "event": "ROUNDUP_SAVED",
        "transaction_id": transaction_id,
        "user_id": user_id,
        "amount": float(amount),
        "round_up_amount": float(round_up_amount),
        "total_amount": float(amount + round_up_amount),
        "date": txn_date.isoformat(),
    }


class LedgerClient:
    """Client for sending round-up events to the external savings ledger"""

    def __init__(self, webhook_url: str | None = None):
        self.webhook_url = webhook_url or settings.ledger_webhook_url
        self.max_retries = settings.webhook_max_retries
        self.backoff_base = settings.webhook_backoff_base
        self.timeout = settings.http_timeout_seconds

    async def send_roundup_event(self, payload: Dict[str, Any]) -> None:
        """
        Deliver a ROUNDUP_SAVED event with retries.

        Retry strategy:
        - Exponential backoff: base * 2^(attempt-1), i.e. 1s, 2s, 4s, 8s
        - Retries on 5xx errors and network failures; 4xx is not retried
        - Tracks latency histogram and failure counter

        Raises the last error once retries are exhausted.
        """
        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            while attempt < self.max_retries:
                try:
                    with webhook_latency_histogram.time():
                        response = await client.post(self.webhook_url, json=payload)
                        response.raise_for_status()
                        return

                except httpx.HTTPStatusError as e:
                    webhook_failure_counter.inc()
                    if e.response.status_code < 500:
                        logger.error(f"Ledger rejected event: {e.response.status_code}")
                        raise
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise

                except httpx.RequestError:
                    webhook_failure_counter.inc()
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise

                backoff = self.backoff_base * (2 ** (attempt - 1))
                logger.warning(f"Ledger delivery failed, retrying in {backoff}s (attempt {attempt})")
                await asyncio.sleep(backoff)

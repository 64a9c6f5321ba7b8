"""Dependency injection for FastAPI endpoints"""

import random
from functools import lru_cache

from fastapi import Request
from roundup_gateway.infrastructure.clients.advisor import AdvisorClient
from roundup_gateway.infrastructure.clients.ledger import LedgerClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


@lru_cache
def get_advisor_client() -> AdvisorClient:
    """Provide the process-wide language-model advisor; its HTTP pool is reused across requests"""
    return AdvisorClient()


def get_ledger_client() -> LedgerClient:
    """Provide Ledger webhook client instance"""
    return LedgerClient()


def get_forecast_rng() -> random.Random:
    """Fresh jitter source for each forecast"""
    return random.Random()

"""Mock savings ledger: acknowledges ROUNDUP_SAVED events with a simulated record.

Ids and confirmation counts are random; nothing here settles real money.
"""

import secrets
import random
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException

app = FastAPI(title="Mock Savings Ledger", version="1.0.0")
EVENTS: List[Dict[str, Any]] = []
SIMULATED_FEE = 0.001


@app.get("/health")
def health(): return {"status": "ok"}


@app.post("/mock-ledger")
def record_event(payload: Dict[str, Any]):
    if payload.get("event") != "ROUNDUP_SAVED":
        raise HTTPException(status_code=400, detail="unsupported event")
    record = {
        "transactionId": f"0x{secrets.token_hex(32)}",
        "blockHash": f"0x{secrets.token_hex(32)}",
        "blockNumber": 18_000_000 + random.randrange(1_000_000),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "amount": payload.get("amount"),
        "roundUpAmount": payload.get("round_up_amount"),
        "fee": SIMULATED_FEE,
        "confirmations": random.randint(1, 12),
    }
    EVENTS.append({"payload": payload, "record": record})
    return record


@app.get("/mock-ledger/events")
def list_events(): return {"events": EVENTS}

# backend/app/api/requests.py
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Request
from pydantic import BaseModel

router = APIRouter()


class DispatchResponse(BaseModel):
    ok: bool
    command: Optional[str] = None
    error: Optional[str] = None


# Async on purpose: handlers then run one at a time on the event loop,
# which is what the dispatcher expects. Launching never blocks.
@router.post("/request", response_model=DispatchResponse)
async def handle_request(request: Request, payload: Any = Body(...)) -> DispatchResponse:
    result = request.app.state.dispatcher.handle_payload(payload)
    return DispatchResponse(ok=result.ok, command=result.command, error=result.error)


@router.get("/status")
async def status(request: Request) -> dict:
    return {
        "ok": True,
        "dispatcher": request.app.state.dispatcher.snapshot(),
        "status": request.app.state.status_store.snapshot(),
    }

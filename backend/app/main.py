# backend/app/main.py
from typing import Optional

from fastapi import FastAPI

from backend.app.api.requests import router as requests_router
from backend.app.status import DispatchStatusStore
from tertestrial.dispatch.dispatcher import Dispatcher


def create_app(dispatcher: Dispatcher, status_store: Optional[DispatchStatusStore] = None) -> FastAPI:
    status_store = status_store or DispatchStatusStore()
    if dispatcher.report_cb is None:
        dispatcher.report_cb = status_store.record

    app = FastAPI(title="tertestrial API")
    app.state.dispatcher = dispatcher
    app.state.status_store = status_store
    app.include_router(requests_router, prefix="/api")
    return app

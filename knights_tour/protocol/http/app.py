from __future__ import annotations

import logging
from typing import Dict

from fastapi import FastAPI, HTTPException, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .store import InMemoryTourStore
from ...engine.bitboard import iter_squares, legal_targets, pop_count
from ...engine.square import square_to_str, str_to_square
from ...search.service import SearchResult, SearchService


logger = logging.getLogger(__name__)


class TourRequest(BaseModel):
    start: str = Field(..., pattern=r"^[a-h][1-8]$", description="Starting square, e.g. a1")


class TourResponse(BaseModel):
    tour_id: str
    start: str
    success: bool
    path: list[str]
    nodes: int
    time_ms: int


class TargetsResponse(BaseModel):
    square: str
    targets: list[str]
    degree: int


def create_app() -> FastAPI:
    app = FastAPI(title="Knight's Tour API", version="0.1.0")

    logging.basicConfig(level=logging.INFO)

    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemoryTourStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/tours", response_model=TourResponse)
    def create_tour(req: TourRequest) -> TourResponse:
        res = SearchService().search(str_to_square(req.start))
        tour_id = store.add(res)
        logger.info(
            "tour search",
            extra={"tour_id": tour_id, "success": res.success, "nodes": res.nodes},
        )
        return _tour_response(tour_id, res)

    @app.get("/api/tours/{tour_id}", response_model=TourResponse)
    async def get_tour(tour_id: str) -> TourResponse:
        res = store.get(tour_id)
        if res is None:
            raise HTTPException(status_code=404, detail="tour not found")
        return _tour_response(tour_id, res)

    @app.delete("/api/tours/{tour_id}", status_code=204)
    async def delete_tour(tour_id: str) -> Response:
        if not store.delete(tour_id):
            raise HTTPException(status_code=404, detail="tour not found")
        return Response(status_code=204)

    @app.get("/api/squares/{square}/targets", response_model=TargetsResponse)
    async def targets(square: str) -> TargetsResponse:
        try:
            sq = str_to_square(square)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        bb = legal_targets(0, sq)
        return TargetsResponse(
            square=square,
            targets=[square_to_str(t) for t in iter_squares(bb)],
            degree=pop_count(bb),
        )

    return app


def _tour_response(tour_id: str, res: SearchResult) -> TourResponse:
    # A failed search leaves an abandoned partial path; never expose it
    path = [square_to_str(sq) for sq in res.path] if res.success else []
    return TourResponse(
        tour_id=tour_id,
        start=square_to_str(res.start),
        success=res.success,
        path=path,
        nodes=res.nodes,
        time_ms=res.time_ms,
    )


# Default app for non-factory servers
app = create_app()

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import RolloutConfig
from .decider import RolloutDecider
from .errors import InvalidInput
from .prom_export import DEFAULT_FRACTION_PCT, GLOBAL_PROM
from .protocol import DecisionRequest, DecisionResponse, ErrorResponse


def configure(app: FastAPI, cfg: RolloutConfig) -> None:
    app.state.rollout_config = cfg
    app.state.rollout_decider = RolloutDecider.from_config(cfg, metrics=GLOBAL_PROM)
    if cfg.metrics_enabled:
        GLOBAL_PROM.set(DEFAULT_FRACTION_PCT, round(cfg.default_fraction * 100))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure(app, RolloutConfig.from_env())
    yield


app = FastAPI(lifespan=lifespan)


@app.get("/healthz")
async def healthz() -> dict[str, bool]:
    return {"ok": True}


@app.get("/metrics")
async def metrics() -> PlainTextResponse:
    return PlainTextResponse(GLOBAL_PROM.render())


@app.post("/rollout/decide")
async def rollout_decide(req: DecisionRequest, request: Request) -> JSONResponse:
    cfg: RolloutConfig = request.app.state.rollout_config
    decider: RolloutDecider = request.app.state.rollout_decider

    fraction = cfg.default_fraction if req.fraction is None else req.fraction
    try:
        decision = decider.decide(req.identifier, fraction)
    except InvalidInput as e:
        return JSONResponse(ErrorResponse(error=str(e)).model_dump(), status_code=400)

    return JSONResponse(
        DecisionResponse(bucket=decision.bucket, fraction=decision.fraction, inside=decision.inside).model_dump()
    )

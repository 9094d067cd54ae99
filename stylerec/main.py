# =============================================
# File: stylerec/main.py
# Purpose: FastAPI app: CORS, structured request logging, typed error responses
# =============================================
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time

from stylerec.deps import get_settings
from stylerec.errors import RecommendationError
from stylerec.routers import metrics, recommend
from stylerec.utils import slog
from stylerec.utils.logging import setup_logging
from stylerec.utils.metrics import record_endpoint, record_error, record_request

setup_logging(get_settings())

app = FastAPI(title="Style Recommendations")

# Same browser contract as the storefront's edge function
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


@app.exception_handler(RecommendationError)
async def _recommendation_error_handler(request: Request, exc: RecommendationError):
    started = getattr(request.state, "started", None)
    latency_ms = int((time.perf_counter() - started) * 1000) if started else 0
    record_error(exc.kind)
    record_request(latency_ms=latency_ms, outcome=exc.kind)

    ctx = getattr(request.state, "log_context", None) or {}
    ctx.update({"error_kind": exc.kind, "error": exc.detail})
    request.state.log_context = ctx
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.middleware("http")
async def _logging_middleware(request, call_next):
    start = time.perf_counter()
    request.state.started = start
    req_id = slog.new_request_id()
    client_ip = request.client.host if request.client else None
    try:
        response = await call_next(request)
    except Exception as e:
        latency_ms = int((time.perf_counter() - start) * 1000)
        ctx = getattr(request.state, "log_context", {})
        slog.log_event(
            "request.error",
            request_id=req_id,
            path=str(request.url.path),
            method=request.method,
            latency_ms=latency_ms,
            client_ip=client_ip,
            error=str(e),
            **(ctx or {}),
        )
        raise
    latency_ms = int((time.perf_counter() - start) * 1000)
    ctx = getattr(request.state, "log_context", {}) or {}
    ctx.setdefault("rate_limited", response.status_code == 429)
    slog.finalize_request_log(
        request_id=req_id,
        method=request.method,
        path=str(request.url.path),
        status=response.status_code,
        latency_ms=latency_ms,
        client_ip=client_ip,
        ctx=ctx,
    )
    record_endpoint(method=request.method, path=str(request.url.path), latency_ms=latency_ms)
    response.headers["X-Request-ID"] = req_id
    return response


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(recommend.router)
app.include_router(metrics.router)

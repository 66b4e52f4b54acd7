"""
Bid Evaluation Service
Scores, ranks and recommends vendor bids for procurement bid packages.
Stateless: every request carries the full package snapshot.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import os

from bid_evaluation import (
    BidPackage,
    DEFAULT_WEIGHTS,
    EvaluationEngine,
    EvaluationError,
    EvaluationResult,
    EvaluationSettings,
    InvalidWeightsError,
    PackageStateError,
    PackageSummary,
    SCORE_BANDS,
    SummaryRequest,
    filter_packages,
    summarize_packages,
)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
WEIGHT_TOLERANCE = float(os.environ.get("WEIGHT_TOLERANCE", "0.01"))
EXTRA_CRITERIA = [
    name.strip() for name in os.environ.get("EXTRA_CRITERIA", "").split(",") if name.strip()
]
PORT = int(os.environ.get("PORT", "8030"))

# Setup logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Prometheus metrics
from prometheus_fastapi_instrumentator import Instrumentator

app = FastAPI(
    title="Bid Evaluation Service",
    description="Multi-criteria bid scoring, ranking and recommendation",
    version="1.0.0"
)

# Initialize Prometheus metrics
Instrumentator().instrument(app).expose(app)

# CORS configuration - allow all origins for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

settings = EvaluationSettings(weight_tolerance=WEIGHT_TOLERANCE, extra_criteria=EXTRA_CRITERIA)


@app.exception_handler(EvaluationError)
async def evaluation_error_handler(request: Request, exc: EvaluationError):
    if isinstance(exc, PackageStateError):
        status_code = 409
    elif isinstance(exc, InvalidWeightsError):
        status_code = 422
    else:
        status_code = 400
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# ============== API Endpoints ==============
@app.get("/")
async def root():
    return {
        "service": "Bid Evaluation Service",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}


@app.post("/evaluate", response_model=EvaluationResult)
async def evaluate_package(package: BidPackage):
    """
    Evaluate a bid package in status 'evaluation'.

    Weights are validated first; bids with missing or out-of-range scores
    are excluded and reported in 'errors'. Prices are min-max normalized
    across the scored bids, totals are weighted sums, and the first
    compliant bid in ranking order is recommended.
    """
    return EvaluationEngine(settings).evaluate(package)


@app.post("/packages/summary", response_model=PackageSummary)
async def package_summary(request: SummaryRequest):
    """Totals across packages matching the optional search, trade and status filters"""
    packages = filter_packages(
        request.packages,
        search=request.search,
        trade=request.trade,
        status=request.status,
    )
    return summarize_packages(packages)


@app.get("/criteria")
async def get_criteria():
    """Accepted criterion names and the default weight set"""
    return {
        "criteria": settings.taxonomy,
        "default_weights": DEFAULT_WEIGHTS,
        "weight_tolerance": settings.weight_tolerance,
    }


@app.get("/score-bands")
async def get_score_bands():
    return [{"band": band.value, "min_score": lower} for lower, band in SCORE_BANDS]


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, FastAPI, HTTPException, Query

from app.config import settings
from app.engine import analyze_sales_data
from app.strategies import default_options
from app.validation import AnalysisError

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def _load_sample(seed: int) -> dict:
    from scripts.seed_data import build_sample_dataset
    return build_sample_dataset(
        seed=seed,
        sellers=settings.SAMPLE_SELLERS,
        products=settings.SAMPLE_PRODUCTS,
        records=settings.SAMPLE_RECORDS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Seed on startup so the sample report is immediately available
    app.state.sample = _load_sample(settings.SAMPLE_SEED)
    yield


app = FastAPI(
    title="Seller Scorecard Service",
    version="1.0.0",
    description="Profit-ranked seller performance and bonus report",
    lifespan=lifespan,
)


def _run(data: Any) -> list[dict]:
    try:
        reports = analyze_sales_data(data, default_options(), top_limit=settings.TOP_PRODUCTS_LIMIT)
    except AnalysisError as exc:
        logger.warning(f"Rejected analysis request: {exc}")
        raise HTTPException(422, str(exc))
    return [r.model_dump(mode="json") for r in reports]


@app.get("/health")
def health_check():
    return {"status": "healthy", "version": app.version}


# ── Analysis ─────────────────────────────────────────────────────────────────

@app.post("/api/v1/analysis", summary="Rank sellers for a submitted dataset")
def analyze(data: dict = Body(...)):
    return {"sellers": _run(data)}


@app.get("/api/v1/analysis/sample", summary="Rank sellers for the seeded sample dataset")
def analyze_sample():
    return {"sellers": _run(app.state.sample)}


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/seed", summary="Regenerate the sample dataset")
def reseed(seed: int = Query(default=settings.SAMPLE_SEED)):
    app.state.sample = _load_sample(seed)
    return {
        "status": "seeded",
        "seed": seed,
        "sellers": len(app.state.sample["sellers"]),
        "products": len(app.state.sample["products"]),
        "purchase_records": len(app.state.sample["purchase_records"]),
    }

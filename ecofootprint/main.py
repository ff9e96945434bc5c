# ecofootprint/main.py
from . import config  # loads .env before anything else

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import factors
from .cache import ResultCache, connect_cache
from .errors import FootprintError, ValidationError
from .integrations.fetcher import fetch_page
from .parsers import extract_product
from .pipeline import FootprintPipeline, ScrapeStrategy, StructuredStrategy, validate_url
from .schemas import AnalyzeRequest, CarbonRequest, dump

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ---- FastAPI app ------------------------------------------------------------
app = FastAPI(title="ecofootprint")

_cache = connect_cache(config.REDIS_URL)


def get_cache() -> Optional[ResultCache]:
    return _cache


def get_fetcher():
    return fetch_page


# ---- error bodies: always {"error": ...} ------------------------------------
@app.exception_handler(FootprintError)
async def footprint_error(request: Request, exc: FootprintError):
    if not isinstance(exc, ValidationError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    return JSONResponse({"error": message}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def body_error(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


def _run(pipeline: FootprintPipeline, payload) -> JSONResponse:
    try:
        result = pipeline.run(payload)
    except FootprintError:
        raise
    except Exception:
        logger.exception("[%s] unexpected failure", pipeline.strategy.name)
        return JSONResponse({"error": "Failed to analyze product"}, status_code=500)
    return JSONResponse(dump(result))


@app.get("/health")
def health(cache: Optional[ResultCache] = Depends(get_cache)):
    return {"ok": True, "cache": bool(cache and cache.connected)}


# ---- footprint endpoints ----------------------------------------------------
@app.post("/api/calculate")
def calculate(
    payload: AnalyzeRequest,
    cache: Optional[ResultCache] = Depends(get_cache),
    fetcher=Depends(get_fetcher),
):
    """Scrape a product page and estimate its footprint in grams CO2e."""
    return _run(FootprintPipeline(ScrapeStrategy(fetcher=fetcher), cache), payload)


@app.post("/api/carbon")
def carbon(payload: CarbonRequest):
    """Estimate a footprint in kg CO2e from explicit product attributes."""
    return _run(FootprintPipeline(StructuredStrategy()), payload)


# ---- Debug endpoints --------------------------------------------------------
@app.get("/debug/factors")
def debug_factors():
    return factors.as_dict()


@app.get("/debug/extract")
def debug_extract(url: str = Query(""), fetcher=Depends(get_fetcher)):
    """Fetch a page and show the product record the calculator would see."""
    html = fetcher(validate_url(url))
    return extract_product(html).model_dump()

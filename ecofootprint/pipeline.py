# ecofootprint/pipeline.py — request → (cache) → load → calculate → (cache)
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Type
from urllib.parse import urlparse

from pydantic import BaseModel

from .cache import ResultCache, cache_key
from .calculator import calculate_scraped, calculate_structured
from .errors import InvalidURL, MissingField
from .integrations.fetcher import fetch_page
from .parsers import extract_product
from .schemas import (
    AnalyzeRequest,
    CarbonRequest,
    FootprintResult,
    ProductInput,
    ProductRecord,
    StructuredResult,
)

logger = logging.getLogger(__name__)


class CalculationStrategy(ABC):
    """One way of turning a request payload into a footprint result."""

    name = "base"
    result_model: Type[BaseModel] = BaseModel

    @abstractmethod
    def validate(self, payload) -> None:
        """Raise a ValidationError if the payload cannot be used."""

    def cache_key(self, payload) -> Optional[str]:
        """None means results of this strategy are never cached."""
        return None

    @abstractmethod
    def load(self, payload) -> Any:
        """Turn the payload into the record the calculator takes."""

    @abstractmethod
    def calculate(self, record) -> BaseModel:
        ...


# ---- variant A: scrape a product page ---------------------------------------
def validate_url(url: Optional[str]) -> str:
    if not url or not isinstance(url, str):
        raise InvalidURL("URL required")
    try:
        parsed = urlparse(url)
    except ValueError:
        raise InvalidURL()
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidURL()
    return url


class ScrapeStrategy(CalculationStrategy):
    name = "scrape"
    result_model = FootprintResult

    def __init__(
        self,
        fetcher: Callable[[str], str] = fetch_page,
        extractor: Callable[[str], ProductRecord] = extract_product,
    ):
        self.fetcher = fetcher
        self.extractor = extractor

    def validate(self, payload: AnalyzeRequest) -> None:
        validate_url(payload.url)

    def cache_key(self, payload: AnalyzeRequest) -> Optional[str]:
        return cache_key(payload.url)

    def load(self, payload: AnalyzeRequest) -> ProductRecord:
        html = self.fetcher(payload.url)
        return self.extractor(html)

    def calculate(self, record: ProductRecord) -> FootprintResult:
        return calculate_scraped(record)


# ---- variant B: structured form input ---------------------------------------
def _missing(v) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())


class StructuredStrategy(CalculationStrategy):
    name = "structured"
    result_model = StructuredResult

    def validate(self, payload: CarbonRequest) -> None:
        required = (payload.weight, payload.unit, payload.product_type, payload.manufacturer_region)
        if any(_missing(v) for v in required):
            raise MissingField()

    def load(self, payload: CarbonRequest) -> ProductInput:
        return ProductInput(
            weight=payload.weight,
            unit=payload.unit,
            product_type=payload.product_type,
            manufacturer_region=payload.manufacturer_region,
            materials=payload.materials or [],
        )

    def calculate(self, record: ProductInput) -> StructuredResult:
        return calculate_structured(record)


# ---- orchestrator -----------------------------------------------------------
class FootprintPipeline:
    def __init__(self, strategy: CalculationStrategy, cache: Optional[ResultCache] = None):
        self.strategy = strategy
        self.cache = cache

    def run(self, payload) -> BaseModel:
        s = self.strategy
        s.validate(payload)

        key = s.cache_key(payload) if self.cache is not None else None
        if key:
            cached = self.cache.get(key, s.result_model)
            if cached is not None:
                logger.info("[%s] cache hit %s", s.name, key)
                return cached

        record = s.load(payload)
        result = s.calculate(record)

        if key:
            self.cache.set(key, result)
        return result

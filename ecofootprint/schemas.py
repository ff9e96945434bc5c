from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional, Union


class _Camel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---- requests ---------------------------------------------------------------
class AnalyzeRequest(BaseModel):
    url: Optional[str] = None


class CarbonRequest(_Camel):
    weight: Optional[Union[float, str]] = None
    unit: Optional[str] = None
    product_type: Optional[str] = Field(None, alias="productType")
    manufacturer_region: Optional[str] = Field(None, alias="manufacturerRegion")
    materials: Optional[List[str]] = None


# ---- scraped product --------------------------------------------------------
class ProductRecord(BaseModel):
    name: Optional[str] = None
    price: float = 0.0
    weight_kg: float = 1.0
    category: str = "general"
    material: str = "composite"
    origin: str = "CN"


class ProductInput(BaseModel):
    weight: Union[float, str]
    unit: str
    product_type: str
    manufacturer_region: str
    materials: List[str] = Field(default_factory=list)


# ---- results ----------------------------------------------------------------
class ScrapedBreakdown(BaseModel):
    manufacturing: int
    materials: int
    transportation: int


class FootprintResult(_Camel):
    product_name: Optional[str] = Field(None, alias="productName")
    carbon_footprint: int = Field(..., alias="carbonFootprint")  # grams CO2e
    breakdown: ScrapedBreakdown
    assumptions: List[str] = Field(default_factory=list)


class FootprintValue(BaseModel):
    value: float  # kg CO2e, unrounded
    display: str


class StructuredBreakdown(BaseModel):
    manufacturing: float
    materials: float
    transportation: float
    energy: float


class Factors(_Camel):
    product_type: str = Field(..., alias="productType")
    manufacturer_region: str = Field(..., alias="manufacturerRegion")
    materials: List[str]
    energy_mix: float = Field(..., alias="energyMix")


class ScaleTier(BaseModel):
    rating: str
    threshold: Optional[float]  # None = unbounded
    color: str


class Score(BaseModel):
    rating: str
    color: str
    percentage: int
    scale: List[ScaleTier]


class StructuredResult(_Camel):
    carbon_footprint: FootprintValue = Field(..., alias="carbonFootprint")
    breakdown: StructuredBreakdown
    factors: Factors
    score: Score


def dump(result: BaseModel) -> dict[str, Any]:
    """Wire form of a result: camelCase keys, JSON-safe values, no null product name."""
    data = result.model_dump(by_alias=True, mode="json")
    if data.get("productName", "") is None:
        data.pop("productName")
    return data

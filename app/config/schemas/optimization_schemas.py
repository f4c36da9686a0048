"""
Pydantic schemas for optimization response validation.
Each optimization mode declares the exact keys the model must return.
"""
from typing import Any, Dict, List, Optional, Type, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from enum import Enum

from app.utils.logging import CorrelatedLogger


class OptimizationMode(str, Enum):
    """Optimization modes selectable by clients."""
    SEO = "seo"
    SUMMARY = "summary"
    HASHTAGS = "hashtags"


TRENDING_KEYWORDS = "trending_keywords"

# Free-form text or a list of text items; models return either shape.
TextOrList = Union[str, List[Any]]


class _ResponseSchema(BaseModel):
    """Base schema: unknown keys are dropped so results carry only declared keys."""
    model_config = ConfigDict(extra="ignore")


class SEOOptimizationResponse(_ResponseSchema):
    """Expected output for the ``seo`` mode."""
    optimizedTitle: str = Field(..., description="Improved title, 60 characters max")
    optimizedDescription: str = Field(..., description="Optimized description, about 125 words")
    tags: List[str] = Field(..., description="10-15 relevant tags")
    chapters: List[Any] = Field(..., description="5 key timestamps for chapters")
    keywords: List[Any] = Field(..., description="Trending keywords to target")
    thumbnailText: TextOrList = Field(..., description="Suggested thumbnail text")


class SummaryOptimizationResponse(_ResponseSchema):
    """Expected output for the ``summary`` mode."""
    executiveSummary: str = Field(..., description="Executive summary, 2-3 sentences")
    keyPoints: List[Any] = Field(..., description="5-7 key points")
    topics: TextOrList = Field(..., description="Main topics covered")
    targetAudience: TextOrList = Field(..., description="Target audience")
    callToAction: TextOrList = Field(..., description="Call to action suggestions")


class HashtagOptimizationResponse(_ResponseSchema):
    """Expected output for the ``hashtags`` mode."""
    primary: List[str] = Field(..., description="5 hashtags most relevant to content")
    secondary: List[str] = Field(..., description="10 niche-specific hashtags")
    trending: List[str] = Field(..., description="5 popular but relevant hashtags")


class TrendingKeywordsResponse(_ResponseSchema):
    """Expected output for trending keyword generation."""
    shortTail: List[str] = Field(..., description="10 short-tail keywords")
    longTail: List[str] = Field(..., description="10 long-tail keywords")


RESPONSE_SCHEMAS: Dict[str, Type[_ResponseSchema]] = {
    OptimizationMode.SEO.value: SEOOptimizationResponse,
    OptimizationMode.SUMMARY.value: SummaryOptimizationResponse,
    OptimizationMode.HASHTAGS.value: HashtagOptimizationResponse,
    TRENDING_KEYWORDS: TrendingKeywordsResponse,
}


class AnalysisValidationError(Exception):
    """Exception raised when response validation fails."""

    def __init__(self, message: str, validation_errors: Optional[List[Dict[str, Any]]] = None):
        self.message = message
        self.validation_errors = validation_errors or []
        super().__init__(self.message)


class ResponseValidator:
    """
    Validator for model responses using the per-mode schemas.

    Validation is strict: a missing key or a wrong shape raises
    AnalysisValidationError, which callers turn into a parse failure.
    """

    def __init__(self, schemas: Optional[Dict[str, Type[_ResponseSchema]]] = None):
        self.logger = CorrelatedLogger(__name__)
        self.schemas = schemas or RESPONSE_SCHEMAS

    def get_schema(self, mode: str) -> Type[_ResponseSchema]:
        """Get the schema class registered for a mode."""
        try:
            return self.schemas[mode]
        except KeyError:
            raise AnalysisValidationError(f"No response schema registered for mode: {mode}")

    def response_keys(self, mode: str) -> List[str]:
        """Keys the model is asked to return for a mode."""
        return list(self.get_schema(mode).model_fields.keys())

    def validate_response(self, mode: str, response_data: Any) -> Dict[str, Any]:
        """
        Validate a parsed model response.

        Args:
            mode: Optimization mode the prompt was composed for
            response_data: Parsed JSON from the model

        Returns:
            The validated result, limited to the declared keys

        Raises:
            AnalysisValidationError: If the data does not match the schema
        """
        schema = self.get_schema(mode)

        if not isinstance(response_data, dict):
            raise AnalysisValidationError(
                f"Expected a JSON object, got {type(response_data).__name__}"
            )

        try:
            validated = schema.model_validate(self._clean_response_data(response_data))
        except ValidationError as e:
            self.logger.warning(f"Response validation failed for mode {mode}: {e.error_count()} error(s)")
            raise AnalysisValidationError(
                f"Validation failed: {e.error_count()} error(s)",
                validation_errors=e.errors()
            )

        self.logger.debug(f"Response validation successful for mode {mode}")
        return validated.model_dump()

    def _clean_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Clean and normalize response data."""
        cleaned = {}

        for key, value in data.items():
            if isinstance(value, str):
                cleaned[key] = value.strip()
            elif isinstance(value, list):
                cleaned[key] = [item.strip() if isinstance(item, str) else item for item in value]
            else:
                cleaned[key] = value

        return cleaned


# Global validator instance
_response_validator = None

def get_response_validator() -> ResponseValidator:
    """Get global response validator instance (singleton pattern)."""
    global _response_validator
    if _response_validator is None:
        _response_validator = ResponseValidator()
    return _response_validator

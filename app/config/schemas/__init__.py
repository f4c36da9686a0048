"""Schema validation system for optimization responses."""

from .optimization_schemas import (
    OptimizationMode,
    TRENDING_KEYWORDS,
    RESPONSE_SCHEMAS,
    SEOOptimizationResponse,
    SummaryOptimizationResponse,
    HashtagOptimizationResponse,
    TrendingKeywordsResponse,
    ResponseValidator,
    AnalysisValidationError,
    get_response_validator
)

__all__ = [
    'OptimizationMode',
    'TRENDING_KEYWORDS',
    'RESPONSE_SCHEMAS',
    'SEOOptimizationResponse',
    'SummaryOptimizationResponse',
    'HashtagOptimizationResponse',
    'TrendingKeywordsResponse',
    'ResponseValidator',
    'AnalysisValidationError',
    'get_response_validator'
]

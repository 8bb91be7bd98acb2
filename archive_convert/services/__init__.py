"""Conversion services (dispatch, run)."""

from archive_convert.services.conversion_service import ConversionReport, ConversionService
from archive_convert.services.dispatcher import (
    ConversionDispatcher,
    DispatchPlan,
    Route,
    build_dispatch_plan,
)

__all__ = [
    "ConversionDispatcher",
    "ConversionReport",
    "ConversionService",
    "DispatchPlan",
    "Route",
    "build_dispatch_plan",
]

"""Valuation services."""

from satprism.core.services.valuation import ValuationPipeline, ValuationService

__all__ = ["ValuationPipeline", "ValuationService"]

"""HTTP surface for the valuation service."""

from satprism.web.app import create_app

__all__ = ["create_app"]

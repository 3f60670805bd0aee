"""api — form-facing entry point: raw input in, QuoteReport out."""

from drapecalc.api.quote import QuoteReport, quote_window

__all__ = ["QuoteReport", "quote_window"]

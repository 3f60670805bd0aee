"""estimator — Fabric Requirement & Cost Estimator public API."""

from drapecalc.estimator.estimate import EstimateContext, estimate

__all__ = ["EstimateContext", "estimate"]

"""Pure reconciliation helpers shared by the provisioning adapters."""

from __future__ import annotations

from .delta import ReconciliationDelta, compute_delta

__all__ = ["ReconciliationDelta", "compute_delta"]

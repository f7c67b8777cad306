"""Adapters that turn coverage tool output into the unified data model."""

from covgap.adapters.llvm_cov import LlvmCovAdapter

__all__ = ["LlvmCovAdapter"]

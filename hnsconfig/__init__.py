"""Admission responses, server checks, object models and label bookkeeping for namespace hierarchies."""

__version__ = "0.1.0"

__all__ = ["admission", "checks", "labels", "objects"]
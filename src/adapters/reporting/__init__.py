"""Reporting adapters - Outcome side-effect hooks."""

from .outcome_logger import OutcomeLogger

__all__ = ["OutcomeLogger"]

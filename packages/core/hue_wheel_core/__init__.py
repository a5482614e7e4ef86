"""Core app services for settings, logging, diagnostics, and render budgets."""

from .config import AppConfig, load_config, save_config, set_value
from .diagnostics import build_doctor_payload
from .performance import BudgetStatus, PerformanceController, PerformanceTargets

__all__ = [
    "AppConfig",
    "BudgetStatus",
    "PerformanceController",
    "PerformanceTargets",
    "build_doctor_payload",
    "load_config",
    "save_config",
    "set_value",
]

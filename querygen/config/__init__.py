"""Configuration management for QueryGen."""

from querygen.config.loader import SuiteLoader, load_suite
from querygen.config.schema import QueryDefinition, SuiteDefinition
from querygen.config.settings import QueryGenSettings, load_settings

__all__ = [
    "QueryGenSettings",
    "load_settings",
    "QueryDefinition",
    "SuiteDefinition",
    "SuiteLoader",
    "load_suite",
]

"""Expansion run domain exports."""

from .expansion_run_use_case import ExpansionRunError, execute_expansion_run
from .processing_order import order_definitions
from .run_contracts import DefinitionFailure, ExpansionReport, ResolvedStruct

__all__ = [
    "DefinitionFailure",
    "ExpansionReport",
    "ExpansionRunError",
    "ResolvedStruct",
    "execute_expansion_run",
    "order_definitions",
]

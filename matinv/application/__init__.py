"""
Application layer - Use cases, DTOs, and access policy.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services and stores
3. Enforcing role-based access on every write path
"""

from matinv.application.policies import AccessPolicy, Action, get_access_policy
from matinv.application.use_cases import (
    AdjustStockUseCase,
    CreateMaterialUseCase,
    GenerateReorderReportUseCase,
    GetDashboardSummaryUseCase,
    UpdateMaterialUseCase,
)

__all__ = [
    # Policy
    "AccessPolicy",
    "Action",
    "get_access_policy",
    # Use Cases
    "CreateMaterialUseCase",
    "UpdateMaterialUseCase",
    "AdjustStockUseCase",
    "GenerateReorderReportUseCase",
    "GetDashboardSummaryUseCase",
]

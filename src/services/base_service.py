"""
Base service layer - shared result envelope for service operations
"""

from typing import Any, List, Optional
from dataclasses import dataclass

@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Any]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, records: List[Any]) -> "ServiceResult":
        return cls(success=True, data=records, count=len(records))

    @classmethod
    def failed(cls, error: str, error_type: str) -> "ServiceResult":
        return cls(success=False, error=error, error_type=error_type)

    @property
    def first(self) -> Optional[Any]:
        """First record of the result, or None when it is empty"""
        return self.data[0] if self.data else None

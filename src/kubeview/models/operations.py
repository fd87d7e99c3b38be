# src/kubeview/models/operations.py
"""
Result envelopes for pod-scoped operations. These never carry exceptions:
failures are reported through `success=False` and a readable message.
`status_code` is the HTTP-equivalent outcome and is not serialised.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class OperationResult(BaseModel):
    success: bool
    message: str = ""
    status_code: int = Field(200, exclude=True)


class PodLogsResult(BaseModel):
    success: bool
    logs: Optional[str] = None
    message: Optional[str] = None
    status_code: int = Field(200, exclude=True)


class PodDetailsResult(BaseModel):
    success: bool
    details: Optional[Dict[str, Any]] = None
    message: Optional[str] = None
    raw_output: Optional[str] = Field(None, description="kubectl output when the describe fallback was used")
    status_code: int = Field(200, exclude=True)

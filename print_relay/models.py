from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from print_relay.errors import TransportError

SUCCESS_MESSAGE = "Print job sent successfully"


class PrintJobIn(BaseModel):
    ip: str
    port: Optional[int] = None  # 9100 when absent
    data: List[int] = Field(..., description="Raw bytes (ESC/POS etc.), one 0-255 value per item")


class PrintRequest(BaseModel):
    address: str
    port: int
    payload: bytes


class RelayOutcome(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, message: str = SUCCESS_MESSAGE) -> "RelayOutcome":
        return cls(success=True, message=message)

    @classmethod
    def failure(cls, error: str) -> "RelayOutcome":
        return cls(success=False, error=error)

    @classmethod
    def from_error(cls, exc: TransportError) -> "RelayOutcome":
        return cls.failure(exc.message)

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

"""Success envelope returned to transports."""

from __future__ import annotations

from dataclasses import asdict, dataclass, is_dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    message: str
    data: T

    def to_dict(self) -> dict:
        data = self.data
        if is_dataclass(data) and not isinstance(data, type):
            data = asdict(data)
        return {"message": self.message, "data": data}

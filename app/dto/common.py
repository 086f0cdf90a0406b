from dataclasses import dataclass
from typing import Any


@dataclass
class ApiResponse:
    status_code: int
    data: Any = None
    message: str = "Success"

    @property
    def success(self) -> bool:
        return self.status_code < 400

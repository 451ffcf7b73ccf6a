from dataclasses import dataclass
from typing import Any


@dataclass
class LogRequest:
    payload: Any
    retries: int = 0

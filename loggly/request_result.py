from dataclasses import dataclass
from typing import Optional, Dict, Union

from requests.structures import CaseInsensitiveDict


@dataclass
class RequestResult:
    success: bool
    status_code: Optional[int]
    text: Optional[str] = None
    headers: Optional[Union[CaseInsensitiveDict, Dict[str, str]]] = None
    error: Optional[Exception] = None
    retryable: bool = False

from typing import Optional, Dict, Any


class ObservabilityClient:
    """
    Interface for forwarding client metrics (sent, failed, retried and dropped
    log events) to a metrics backend of your choice
    """

    def init(self, *args, **kwargs) -> None:
        pass

    def increment(self, metric_name: str, value: int = 1, tags: Optional[Dict[str, Any]] = None) -> None:
        pass

    def gauge(self, metric_name: str, value: float, tags: Optional[Dict[str, Any]] = None) -> None:
        pass

    def distribution(self, metric_name: str, value: float, tags: Optional[Dict[str, Any]] = None) -> None:
        pass

    def shutdown(self) -> None:
        pass

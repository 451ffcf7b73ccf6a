from datetime import datetime, timezone
from typing import List, Tuple

KEY_TIMESTAMP = "timestamp"


def build_endpoint_url(api: str, token: str, tags: List[str]) -> str:
    if not api.endswith("/"):
        api += "/"
    return f"{api}bulk/{token}/tag/{','.join(tags)}/"


def format_timestamp(moment: datetime) -> str:
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def timestamp() -> Tuple[str, str]:
    """
    Key and value for the current UTC time, ISO-8601 with millisecond precision,
    the format Loggly parses automatically in JSON events

    :return: ("timestamp", "YYYY-MM-DDTHH:MM:SS.mmmZ")
    """
    return KEY_TIMESTAMP, format_timestamp(datetime.now(timezone.utc))

from datetime import datetime, timezone

# Microsecond precision keeps lexical order equal to chronological order
# for rows written within the same second.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> str:
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)

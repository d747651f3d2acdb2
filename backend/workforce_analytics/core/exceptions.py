class InvalidRangeError(ValueError):
    """Report range starts after it ends."""

    def __init__(self, start, end) -> None:
        self.start = start
        self.end = end
        super().__init__(f"Range start {start} is after range end {end}")


class MalformedRecordWarning(UserWarning):
    """A record that cannot contribute to a count; aggregation continues without it."""

    def __init__(self, source: str, record_key: str, reason: str) -> None:
        self.source = source
        self.record_key = record_key
        self.reason = reason
        super().__init__(f"{source} record {record_key}: {reason}")

"""Pipeline-related constants."""


class Pipeline:
    """Pipeline configuration constants."""

    QUEUE_SIZE = 1000
    SENTINEL = object()  # Unique end-of-stream marker
    POLL_INTERVAL = 0.1  # Seconds between cancellation checks while blocked


class SizeBound:
    """Size bound constants."""

    UNSET = -1


class StageName:
    """Names used for stage threads, logs and statistics."""

    SOURCE = "source"
    SUFFIX_FILTER = "suffix_filter"
    SIZE_FILTER = "size_filter"
    SINK = "sink"

    ORDER = (SOURCE, SUFFIX_FILTER, SIZE_FILTER, SINK)


__all__ = ["Pipeline", "SizeBound", "StageName"]

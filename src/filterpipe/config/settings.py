"""Filter settings model.

FilterSettings holds everything a pipeline run is configured with. It is
built once from the command line and is immutable afterwards; all
validation happens here, before any pipeline component exists.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from filterpipe.shared.constants import CLIOptions, Pipeline, SizeBound
from filterpipe.shared.errors import ApplicationError, create_config_error


class FilterSettings(BaseModel):
    """Pipeline filter configuration.

    Attributes:
        min_size: Exclusive minimum size in bytes, -1 for no minimum.
        max_size: Exclusive maximum size in bytes, -1 for no maximum.
        suffixes: Accepted suffixes, compared verbatim. Empty accepts all.
        queue_size: Capacity of each queue between stages.
    """

    model_config = ConfigDict(frozen=True)

    min_size: int = Field(
        default=SizeBound.UNSET,
        description="Minimum file size in bytes (-1 means no minimum)",
    )
    max_size: int = Field(
        default=SizeBound.UNSET,
        description="Maximum file size in bytes (-1 means no maximum)",
    )
    suffixes: tuple[str, ...] = Field(
        default=(),
        description="File suffixes to accept; empty accepts all",
    )
    queue_size: int = Field(
        default=Pipeline.QUEUE_SIZE,
        gt=0,
        description="Capacity of each inter-stage queue",
    )

    @field_validator("min_size", "max_size")
    @classmethod
    def validate_bound(cls, value: int) -> int:
        """Reject negative bounds other than the unset marker."""
        if value < SizeBound.UNSET:
            msg = f"size bounds must be >= 0, or {SizeBound.UNSET} for no bound (got {value})"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def validate_bound_order(self) -> FilterSettings:
        """Require min < max when both bounds are set."""
        if self.has_min_size and self.has_max_size and self.min_size >= self.max_size:
            msg = (
                "minimum size must be < maximum size "
                f"(got min={self.min_size}, max={self.max_size})"
            )
            raise ValueError(msg)
        return self

    @property
    def has_min_size(self) -> bool:
        return self.min_size != SizeBound.UNSET

    @property
    def has_max_size(self) -> bool:
        return self.max_size != SizeBound.UNSET


def parse_suffixes(raw: str) -> tuple[str, ...]:
    """Split a comma-separated suffix list.

    Entries are kept verbatim: no trimming, no case folding, and empty
    entries stay (an empty entry matches paths without an extension).
    An empty string yields no suffixes at all.

    Examples:
        >>> parse_suffixes(".pdf,.txt")
        ('.pdf', '.txt')
        >>> parse_suffixes("")
        ()
    """
    if not raw:
        return ()
    return tuple(raw.split(CLIOptions.SUFFIX_SEPARATOR))


def _describe_validation_error(error: ValidationError) -> str:
    messages = []
    for detail in error.errors():
        message = detail.get("msg", "")
        message = message.removeprefix("Value error, ")
        location = ".".join(str(part) for part in detail.get("loc", ()))
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


def build_filter_settings(
    min_size: int = SizeBound.UNSET,
    max_size: int = SizeBound.UNSET,
    suffixes: str = "",
    queue_size: int = Pipeline.QUEUE_SIZE,
) -> FilterSettings:
    """Build validated settings from command line values.

    Args:
        min_size: Minimum size, -1 for none.
        max_size: Maximum size, -1 for none.
        suffixes: Comma-separated suffix list.
        queue_size: Capacity of each inter-stage queue.

    Returns:
        The validated FilterSettings.

    Raises:
        ApplicationError: If the values violate a constraint.
    """
    try:
        return FilterSettings(
            min_size=min_size,
            max_size=max_size,
            suffixes=parse_suffixes(suffixes),
            queue_size=queue_size,
        )
    except ValidationError as e:
        error: ApplicationError = create_config_error(
            _describe_validation_error(e),
            operation="build_filter_settings",
            original_error=e,
        )
        raise error from e

"""Shared utility helpers used across the core library."""

from .math_utils import (
    entropy,
    kl_divergence,
    jensen_shannon_divergence,
    safe_divide,
    growth,
    magnitude,
)
from .config import (
    RuntimeConfig,
    get_config,
    configure,
)
from .serialization import (
    serialize_to_json,
    deserialize_from_json,
    to_jsonable,
    serialize_fingerprint,
)
from .logging import (
    get_logger,
    configure_logging,
)
from .param_validation import (
    ensure,
    ensure_choice,
    ensure_type,
    ParamValidationError,
)

__all__ = [
    "entropy",
    "kl_divergence",
    "jensen_shannon_divergence",
    "safe_divide",
    "growth",
    "magnitude",
    "RuntimeConfig",
    "get_config",
    "configure",
    "serialize_to_json",
    "deserialize_from_json",
    "to_jsonable",
    "serialize_fingerprint",
    "get_logger",
    "configure_logging",
    "ensure",
    "ensure_choice",
    "ensure_type",
    "ParamValidationError",
]

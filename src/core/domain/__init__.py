"""
Domain models and value objects.

Contains generator configuration profiles and generation requests.
"""

from src.core.domain.config import (
    NUM_DIGITS_PER_OBSERVATION,
    NUM_OBSERVATIONS_MAX,
    NUM_PRIME_GERMAIN_GAP_MAX,
    PRODUCTION_CONFIG,
    SEED_MAX,
    TEST_CONFIG,
    ConfigProfile,
    ConfigurationCheckResult,
    ConfigurationError,
    GeneratorConfig,
    check_configuration,
    ensure_valid_configuration,
    get_profile_config,
)
from src.core.domain.request import (
    GenerationRequest,
    InputValidationError,
    make_request,
    validate_request,
)

__all__ = [
    # Config module
    "NUM_OBSERVATIONS_MAX",
    "SEED_MAX",
    "NUM_DIGITS_PER_OBSERVATION",
    "NUM_PRIME_GERMAIN_GAP_MAX",
    "PRODUCTION_CONFIG",
    "TEST_CONFIG",
    "ConfigProfile",
    "ConfigurationCheckResult",
    "ConfigurationError",
    "GeneratorConfig",
    "check_configuration",
    "ensure_valid_configuration",
    "get_profile_config",
    # Request model
    "GenerationRequest",
    "InputValidationError",
    "make_request",
    "validate_request",
]

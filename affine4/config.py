# config.py

"""
Process-wide numeric configuration.

EPSILON is the single tolerance used for every singularity decision in the
package. It is resolved once, at import time, and must not be reassigned
afterwards: all invertibility checks have to agree with each other.

A deployment can override the default by exporting ``AFFINE4_EPSILON`` before
the first import of :mod:`affine4`.
"""
import logging
import math
import os

logger = logging.getLogger(__name__)

DEFAULT_EPSILON: float = 1e-6
EPSILON_ENV_VAR: str = "AFFINE4_EPSILON"


def _resolve_epsilon(raw, default: float = DEFAULT_EPSILON) -> float:
    """Parse an epsilon override, falling back to ``default`` when unusable."""
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", EPSILON_ENV_VAR, raw)
        return default
    if not math.isfinite(value) or value <= 0.0:
        logger.warning("Ignoring %s=%r: must be a positive finite float",
                       EPSILON_ENV_VAR, raw)
        return default
    return value


EPSILON: float = _resolve_epsilon(os.environ.get(EPSILON_ENV_VAR))

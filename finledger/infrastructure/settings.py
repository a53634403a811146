"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import os
from typing import Optional

from finledger.domain.constants import (
    DEFAULT_EXPENSE_VARIATION,
    DEFAULT_INCOME_VARIATION,
    DEFAULT_TRAILING_MONTHS,
)
from finledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ForecastSettings:
    """Settings for the balance projection.

    Attributes:
        income_variation: Bound of the relative income perturbation.
        expense_variation: Bound of the relative expense perturbation.
        trailing_months: Months of history averaged into the baseline.
        seed: Optional seed making projections reproducible.
    """

    income_variation: Decimal = DEFAULT_INCOME_VARIATION
    expense_variation: Decimal = DEFAULT_EXPENSE_VARIATION
    trailing_months: int = DEFAULT_TRAILING_MONTHS
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "ForecastSettings":
        """Build settings from environment variables.

        Returns:
            ForecastSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        return cls(
            income_variation=cls._read_bound(
                "FORECAST_INCOME_VARIATION",
                DEFAULT_INCOME_VARIATION,
                logger=logger,
            ),
            expense_variation=cls._read_bound(
                "FORECAST_EXPENSE_VARIATION",
                DEFAULT_EXPENSE_VARIATION,
                logger=logger,
            ),
            trailing_months=cls._read_int(
                "FORECAST_TRAILING_MONTHS",
                DEFAULT_TRAILING_MONTHS,
                minimum=1,
                logger=logger,
            ),
            seed=cls._read_seed(logger=logger),
        )

    @staticmethod
    def _read_bound(name: str, default: Decimal, logger) -> Decimal:
        """Read a variation bound in [0, 1].

        Args:
            name: Environment variable name.
            default: Value used when unset or invalid.
            logger: Logger used for warnings.

        Returns:
            Decimal: Parsed bound or the default.
        """
        raw = os.getenv(name, "").strip()
        if not raw:
            return default
        try:
            value = Decimal(raw)
        except InvalidOperation:
            logger.warning(f"Invalid {name}={raw!r}, using {default}")
            return default
        if not value.is_finite() or not Decimal("0") <= value <= Decimal("1"):
            logger.warning(f"{name}={raw!r} outside [0, 1], using {default}")
            return default
        return value

    @staticmethod
    def _read_int(name: str, default: int, minimum: int, logger) -> int:
        raw = os.getenv(name, "").strip()
        if not raw:
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Invalid {name}={raw!r}, using {default}")
            return default
        if value < minimum:
            logger.warning(f"{name}={raw!r} below {minimum}, using {default}")
            return default
        return value

    @staticmethod
    def _read_seed(logger) -> Optional[int]:
        raw = os.getenv("FORECAST_SEED", "").strip()
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"Invalid FORECAST_SEED={raw!r}, ignoring it")
            return None


__all__ = ["ForecastSettings"]

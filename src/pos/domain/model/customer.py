"""Customer aggregate: identity, tier and loyalty balance.

The tier is a closed set that drives two policies: a flat purchase
discount and a loyalty-accrual multiplier.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from pos.domain.exceptions import ValidationError
from pos.domain.model.value_objects import Rate

logger = logging.getLogger(__name__)

BASE_LOYALTY_RATE = Decimal("0.01")


class CustomerTier(Enum):
    REGULAR = "Regular"
    PREMIUM = "Premium"
    VIP = "VIP"
    EMPLOYEE = "Employee"

    @property
    def discount_rate(self) -> Rate:
        return _TIER_DISCOUNTS[self]

    @property
    def loyalty_multiplier(self) -> Decimal:
        return _TIER_MULTIPLIERS[self]

    @property
    def upgrade_threshold(self) -> Decimal | None:
        """Spend at which the tier becomes eligible for an upgrade, if any."""
        return _UPGRADE_THRESHOLDS.get(self)


_TIER_DISCOUNTS = {
    CustomerTier.REGULAR: Rate(Decimal("0")),
    CustomerTier.PREMIUM: Rate(Decimal("0.05")),
    CustomerTier.VIP: Rate(Decimal("0.10")),
    CustomerTier.EMPLOYEE: Rate(Decimal("0.15")),
}

_TIER_MULTIPLIERS = {
    CustomerTier.REGULAR: Decimal("1.0"),
    CustomerTier.PREMIUM: Decimal("1.5"),
    CustomerTier.VIP: Decimal("2.0"),
    CustomerTier.EMPLOYEE: Decimal("3.0"),
}

_UPGRADE_THRESHOLDS = {
    CustomerTier.REGULAR: Decimal("500"),
    CustomerTier.PREMIUM: Decimal("2000"),
}


@dataclass
class Customer:
    """A registered customer.

    Invariants:
    - ``loyalty_points`` is never negative
    """

    id: str
    first_name: str
    last_name: str
    email: str = ""
    phone: str = ""
    tier: CustomerTier = CustomerTier.REGULAR
    total_spent: Decimal = Decimal("0")
    transaction_count: int = 0
    loyalty_points: Decimal = Decimal("0")
    member_since: date = field(default_factory=date.today)
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.first_name or not self.first_name.strip():
            raise ValidationError("Customer first name is required")
        if self.loyalty_points < 0:
            raise ValidationError("Loyalty points cannot be negative")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def discount_rate(self) -> Rate:
        return self.tier.discount_rate

    @property
    def loyalty_multiplier(self) -> Decimal:
        return self.tier.loyalty_multiplier

    def points_for(self, amount: Decimal) -> Decimal:
        """Loyalty points this customer accrues on ``amount`` of spend."""
        return amount * BASE_LOYALTY_RATE * self.loyalty_multiplier

    # --- Purchases and loyalty ------------------------------------------------

    def record_purchase(self, amount: Decimal, points: Decimal | None = None) -> None:
        """Record spend and accrue loyalty points for it.

        Used in both directions.  A positive ``amount`` is a completed
        purchase: spend grows, the transaction count goes up and points
        accrue.  A negative ``amount`` reverses (part of) a refunded
        purchase: spend shrinks and the matching points are taken back,
        with the balance floored at zero.  Refunds do not touch the
        transaction count.

        ``points`` overrides the accrual worked out from the current tier.
        Transactions pass the points they recorded at pricing time, so a
        tier change between sale and refund reverses what was granted.
        """
        self.total_spent += amount
        if amount > 0:
            self.transaction_count += 1
        if points is None:
            points = self.points_for(amount)
        if points >= 0:
            self.add_loyalty_points(points)
        else:
            self._revoke_points(-points)

    def add_loyalty_points(self, points: Decimal) -> None:
        if points < 0:
            raise ValidationError("Cannot add a negative number of points")
        self.loyalty_points += points

    def redeem_points(self, points: Decimal) -> bool:
        if points < 0 or points > self.loyalty_points:
            logger.warning(
                "Customer %s cannot redeem %s points (balance %s)",
                self.id, points, self.loyalty_points,
            )
            return False
        self.loyalty_points -= points
        return True

    def _revoke_points(self, points: Decimal) -> None:
        if points > self.loyalty_points:
            logger.info(
                "Customer %s already spent reversed points; balance floored at 0",
                self.id,
            )
        self.loyalty_points = max(Decimal("0"), self.loyalty_points - points)

    # --- Tier -----------------------------------------------------------------

    @property
    def is_eligible_for_upgrade(self) -> bool:
        """Advisory signal only; tiers are never upgraded automatically."""
        threshold = self.tier.upgrade_threshold
        return threshold is not None and self.total_spent >= threshold

    def change_tier(self, tier: CustomerTier) -> None:
        self.tier = tier

    def deactivate(self) -> None:
        self.is_active = False

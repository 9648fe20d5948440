"""Division of classified assets and debts between the spouses.

Community and quasi-community items are split by the target ratio
(spouse 1's share); separate items go wholly to their owner. Dollar shares
are rounded half-up to the cent for spouse 1 and spouse 2 receives the
remainder, so every split adds back to the item's total exactly.

The notional split is bookkeeping. In practice a community item titled to
one spouse (a house in one name, a car) stays with that spouse, so the
allocator also tracks what each spouse actually holds and computes the
equalization payment that brings the holder back to the notional share.
All of this is carried forward in ``RunningTotals`` as items are allocated.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Union

import structlog

from .classifier import ClassifiedItem
from .models import (
    AssetDivision,
    DebtDivision,
    DivisionSummary,
    Spouse,
    quantize_cents,
)

logger = structlog.get_logger()

ZERO = Decimal("0")
COMMUNITY_RATIO = Decimal("0.5")


def split_amount(total: Decimal, spouse1_ratio: Decimal) -> tuple[Decimal, Decimal]:
    """
    Split a dollar amount by ratio.

    Args:
        total: Amount to split
        spouse1_ratio: Spouse 1's fraction of the amount

    Returns:
        (spouse1, spouse2) where spouse2 = total - spouse1
    """
    spouse1 = quantize_cents(total * spouse1_ratio)
    return spouse1, total - spouse1


def _per_spouse() -> dict[Spouse, Decimal]:
    return {Spouse.SPOUSE1: ZERO, Spouse.SPOUSE2: ZERO}


@dataclass
class RunningTotals:
    """Estate totals accumulated while allocating.

    ``notional`` is each spouse's ratio share of net community property;
    ``held`` is the net community property each spouse actually keeps;
    ``separate`` is each spouse's net separate estate.
    """
    community_assets: Decimal = ZERO
    community_debts: Decimal = ZERO
    separate_assets: Decimal = ZERO
    separate_debts: Decimal = ZERO
    notional: dict[Spouse, Decimal] = field(default_factory=_per_spouse)
    held: dict[Spouse, Decimal] = field(default_factory=_per_spouse)
    separate: dict[Spouse, Decimal] = field(default_factory=_per_spouse)

    @property
    def net_community(self) -> Decimal:
        return self.community_assets - self.community_debts

    def record_community(
        self,
        amount: Decimal,
        shares: tuple[Decimal, Decimal],
        titled_to: Optional[Spouse],
        sign: int,
    ) -> None:
        """Add a community item; ``sign`` is +1 for assets, -1 for debts."""
        if sign > 0:
            self.community_assets += amount
        else:
            self.community_debts += amount
        spouse1_share, spouse2_share = shares
        self.notional[Spouse.SPOUSE1] += sign * spouse1_share
        self.notional[Spouse.SPOUSE2] += sign * spouse2_share
        if titled_to is None:
            self.held[Spouse.SPOUSE1] += sign * spouse1_share
            self.held[Spouse.SPOUSE2] += sign * spouse2_share
        else:
            self.held[titled_to] += sign * amount

    def record_separate(self, amount: Decimal, owner: Spouse, sign: int) -> None:
        """Add a separate item; ``sign`` is +1 for assets, -1 for debts."""
        if sign > 0:
            self.separate_assets += amount
        else:
            self.separate_debts += amount
        self.separate[owner] += sign * amount


@dataclass
class Allocation:
    """Allocator output, ready to be assembled into a PropertyDivision."""
    asset_divisions: list[AssetDivision]
    debt_divisions: list[DebtDivision]
    spouse1_assets: list[AssetDivision]
    spouse2_assets: list[AssetDivision]
    spouse1_debts: list[DebtDivision]
    spouse2_debts: list[DebtDivision]
    totals: RunningTotals
    summary: DivisionSummary

    @property
    def total_value(self) -> dict[Spouse, Decimal]:
        """Net value each spouse actually holds, before equalization."""
        return {
            spouse: self.totals.held[spouse] + self.totals.separate[spouse]
            for spouse in Spouse
        }


class DivisionAllocator:
    """
    Allocate classified items by a target ratio.

    Args:
        spouse1_ratio: Spouse 1's share of the net community estate
            (0.5 for community property states)
        equalization_threshold: Payments at or below this amount are not reported
    """

    def __init__(
        self,
        spouse1_ratio: Union[Decimal, float] = COMMUNITY_RATIO,
        equalization_threshold: Decimal = ZERO,
    ):
        if not isinstance(spouse1_ratio, Decimal):
            spouse1_ratio = Decimal(str(spouse1_ratio))
        if not ZERO <= spouse1_ratio <= 1:
            raise ValueError(f"spouse1_ratio must be within [0, 1], got {spouse1_ratio}")
        self.spouse1_ratio = spouse1_ratio
        self.equalization_threshold = equalization_threshold

    def allocate(
        self,
        assets: list[ClassifiedItem],
        debts: list[ClassifiedItem],
    ) -> Allocation:
        """Allocate every item, preserving input order."""
        totals = RunningTotals()
        lists: dict[tuple[str, Spouse], list] = {
            (kind, spouse): [] for kind in ("asset", "debt") for spouse in Spouse
        }

        asset_divisions = []
        for classified in assets:
            division = self._allocate_item(classified, totals, sign=1)
            asset_divisions.append(division)
            for spouse in self._interested(classified):
                lists[("asset", spouse)].append(division)

        debt_divisions = []
        for classified in debts:
            division = self._allocate_item(classified, totals, sign=-1)
            debt_divisions.append(division)
            for spouse in self._interested(classified):
                lists[("debt", spouse)].append(division)

        return Allocation(
            asset_divisions=asset_divisions,
            debt_divisions=debt_divisions,
            spouse1_assets=lists[("asset", Spouse.SPOUSE1)],
            spouse2_assets=lists[("asset", Spouse.SPOUSE2)],
            spouse1_debts=lists[("debt", Spouse.SPOUSE1)],
            spouse2_debts=lists[("debt", Spouse.SPOUSE2)],
            totals=totals,
            summary=self._summarize(totals),
        )

    def _allocate_item(
        self,
        classified: ClassifiedItem,
        totals: RunningTotals,
        sign: int,
    ) -> Union[AssetDivision, DebtDivision]:
        amount = classified.value
        if classified.is_community:
            shares = split_amount(amount, self.spouse1_ratio)
            totals.record_community(amount, shares, classified.titled_to, sign)
            reasoning = classified.reasoning(float(self.spouse1_ratio))
        else:
            owner = classified.owner or Spouse.SPOUSE1
            shares = (amount, ZERO) if owner is Spouse.SPOUSE1 else (ZERO, amount)
            totals.record_separate(amount, owner, sign)
            reasoning = classified.reasoning()

        item = classified.item
        if sign > 0:
            return AssetDivision(
                asset_id=item.id,
                description=item.description,
                total_value=amount,
                spouse1_share=shares[0],
                spouse2_share=shares[1],
                classification=reasoning,
            )
        return DebtDivision(
            debt_id=item.id,
            description=item.description,
            total_balance=amount,
            spouse1_share=shares[0],
            spouse2_share=shares[1],
            classification=reasoning,
        )

    @staticmethod
    def _interested(classified: ClassifiedItem) -> tuple[Spouse, ...]:
        """Spouses holding an interest in the item."""
        if classified.is_community:
            return (Spouse.SPOUSE1, Spouse.SPOUSE2)
        return (classified.owner or Spouse.SPOUSE1,)

    def _summarize(self, totals: RunningTotals) -> DivisionSummary:
        """Compute the equalization payment from the running totals."""
        # Positive: spouse 1 holds more community property than the notional share
        excess = totals.held[Spouse.SPOUSE1] - totals.notional[Spouse.SPOUSE1]

        payment: Optional[Decimal] = None
        payer: Optional[Spouse] = None
        awarded = dict(totals.held)
        if abs(excess) > self.equalization_threshold:
            payment = abs(excess)
            payer = Spouse.SPOUSE1 if excess > 0 else Spouse.SPOUSE2
            awarded[payer] -= payment
            awarded[payer.other] += payment
            logger.info(
                "equalization_payment",
                amount=str(payment),
                payment_from=payer.value,
            )
        elif excess != 0:
            logger.debug(
                "equalization_below_threshold",
                amount=str(abs(excess)),
                threshold=str(self.equalization_threshold),
            )

        return DivisionSummary(
            total_community_assets=totals.community_assets,
            total_community_debts=totals.community_debts,
            net_community_estate=totals.net_community,
            spouse1_share_of_net_community=totals.notional[Spouse.SPOUSE1],
            spouse2_share_of_net_community=totals.notional[Spouse.SPOUSE2],
            spouse1_net_separate_estate=totals.separate[Spouse.SPOUSE1],
            spouse2_net_separate_estate=totals.separate[Spouse.SPOUSE2],
            total_net_awarded_spouse1=awarded[Spouse.SPOUSE1] + totals.separate[Spouse.SPOUSE1],
            total_net_awarded_spouse2=awarded[Spouse.SPOUSE2] + totals.separate[Spouse.SPOUSE2],
            equalization_payment=payment,
            payment_from=payer,
            payment_to=payer.other if payer else None,
        )

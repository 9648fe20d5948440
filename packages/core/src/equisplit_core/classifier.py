"""Marital vs. separate property classification.

Each asset and debt is tagged before allocation:
1. Not flagged separate: community/marital property.
2. Flagged separate, quasi-community, in a community state that recognizes
   QCP: quasi-community property, allocated as community.
3. Otherwise: separate property of the titled owner.

Classification never raises. Malformed flags were already coerced to False
(marital) by the input models; anything that looks inconsistent produces a
review warning instead of an error.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Optional, Union

import structlog

from .jurisdictions import get_jurisdiction_info
from .models import (
    Asset,
    Debt,
    Ownership,
    PersonalInfo,
    Reasoning,
    ReasoningKind,
    Spouse,
)

logger = structlog.get_logger()

DivisibleItem = Union[Asset, Debt]


@dataclass(frozen=True)
class ClassifiedItem:
    """An input item with its classification outcome."""
    item: DivisibleItem
    kind: ReasoningKind
    owner: Optional[Spouse] = None
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_debt(self) -> bool:
        return isinstance(self.item, Debt)

    @property
    def is_community(self) -> bool:
        """Community and quasi-community items are divided by ratio."""
        return self.kind is not ReasoningKind.SEPARATE_PROPERTY

    @property
    def value(self) -> Decimal:
        """Asset value or debt balance."""
        if isinstance(self.item, Debt):
            return self.item.current_balance
        return self.item.current_value

    @property
    def titled_to(self) -> Optional[Spouse]:
        """Spouse holding sole title, if any."""
        if self.item.owned_by is None:
            return None
        return self.item.owned_by.spouse

    def reasoning(self, spouse1_ratio: Optional[float] = None) -> Reasoning:
        """Build the structured reasoning for this item."""
        return Reasoning(
            kind=self.kind,
            item_kind="debt" if self.is_debt else "asset",
            owner=self.owner,
            spouse1_ratio=spouse1_ratio if self.is_community else None,
        )


class PropertyClassifier:
    """
    Classify assets and debts for one case.

    The owner of a separate item with no sole titleholder is ambiguous. It is
    resolved to ``default_separate_owner`` and flagged in the item's warnings
    so the choice is never silent.
    """

    def __init__(
        self,
        personal_info: PersonalInfo,
        default_separate_owner: Spouse = Spouse.SPOUSE1,
    ):
        self.personal_info = personal_info
        self.jurisdiction = get_jurisdiction_info(personal_info.jurisdiction)
        self.default_separate_owner = default_separate_owner

    def classify(self, item: DivisibleItem) -> ClassifiedItem:
        """Classify a single asset or debt."""
        label = "debt" if isinstance(item, Debt) else "asset"
        warnings: list[str] = []

        if not item.is_separate_property:
            warnings.extend(self._date_warnings(item, label))
            return self._done(item, ReasoningKind.COMMUNITY_RULE_APPLIED, None, warnings)

        if item.is_quasi_community_property:
            if self.jurisdiction.is_community_property and self.jurisdiction.supports_qcp:
                return self._done(item, ReasoningKind.QCP_APPLIED, None, warnings)
            warnings.append(
                f"{label.capitalize()} '{item.id}' is flagged quasi-community but "
                f"{self.jurisdiction.name} does not recognize quasi-community "
                "property; treated as separate property"
            )

        owner = self._resolve_owner(item.owned_by)
        if owner is None:
            owner = self.default_separate_owner
            warnings.append(
                f"Separate {label} '{item.id}' has no sole owner; "
                f"assigned to {owner.label} by default"
            )
        return self._done(item, ReasoningKind.SEPARATE_PROPERTY, owner, warnings)

    def classify_all(self, items: Iterable[DivisibleItem]) -> list[ClassifiedItem]:
        """Classify items, preserving input order."""
        return [self.classify(item) for item in items]

    @staticmethod
    def _resolve_owner(owned_by: Optional[Ownership]) -> Optional[Spouse]:
        if owned_by is None:
            return None
        return owned_by.spouse

    def _date_warnings(self, item: DivisibleItem, label: str) -> list[str]:
        """Flag marital items whose dates fall outside the marriage."""
        acquired = item.acquisition_date
        if acquired is None:
            return []
        info = self.personal_info
        if info.marriage_date is not None and acquired < info.marriage_date:
            return [
                f"Marital {label} '{item.id}' predates the marriage "
                f"({acquired.isoformat()}); it may be separate property"
            ]
        if info.separation_date is not None and acquired > info.separation_date:
            return [
                f"Marital {label} '{item.id}' postdates the separation "
                f"({acquired.isoformat()}); it may be separate property"
            ]
        return []

    def _done(
        self,
        item: DivisibleItem,
        kind: ReasoningKind,
        owner: Optional[Spouse],
        warnings: list[str],
    ) -> ClassifiedItem:
        logger.debug(
            "item_classified",
            item_id=item.id,
            classification=kind.value,
            owner=owner.value if owner else None,
            jurisdiction=self.jurisdiction.code.value,
        )
        return ClassifiedItem(item=item, kind=kind, owner=owner, warnings=tuple(warnings))


def classify_items(
    personal_info: PersonalInfo,
    items: Iterable[DivisibleItem],
    default_separate_owner: Spouse = Spouse.SPOUSE1,
) -> list[ClassifiedItem]:
    """
    Classify a batch of assets and/or debts.

    Args:
        personal_info: Case details (jurisdiction and marriage dates)
        items: Assets and debts in any mix
        default_separate_owner: Owner assumed for separate items with no sole owner

    Returns:
        One ClassifiedItem per input, in input order
    """
    return PropertyClassifier(personal_info, default_separate_owner).classify_all(items)

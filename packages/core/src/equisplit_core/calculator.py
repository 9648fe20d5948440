"""Property division calculations per state marital property law.

This module provides the engine entry points:
1. PropertyDivisionCalculator - classifies, scores, allocates and audits one case
2. classify_and_divide - stateless wrapper accepting models or plain dicts
"""

from decimal import Decimal
from typing import Any, Iterable, Optional

import structlog

from .allocator import COMMUNITY_RATIO, Allocation, DivisionAllocator
from .classifier import ClassifiedItem, PropertyClassifier
from .config import EquiSplitSettings, get_settings
from .confidence import ConfidenceInputs, estimate_confidence
from .equity_scorer import evaluate_equity_factors
from .jurisdictions import METHODOLOGY_VERSION, JurisdictionInfo, get_jurisdiction_info
from .models import (
    Asset,
    AuditEntry,
    Debt,
    EquitableDistributionFactors,
    FactorAdjustment,
    FinancialAccount,
    PersonalInfo,
    PropertyDivision,
    PropertyRegime,
    Spouse,
)
from .validation import coerce_model, coerce_models

logger = structlog.get_logger()


class PropertyDivisionCalculator:
    """
    Divide marital assets and debts between two spouses.

    Community property jurisdictions split community property 50/50.
    Equitable distribution jurisdictions split it by the equity factor
    score. Separate property stays with its owner.

    All calculations are logged for audit trail and legal defensibility.
    A calculator holds per-run state; use one instance per thread.
    """

    def __init__(self, settings: Optional[EquiSplitSettings] = None):
        """
        Initialize calculator.

        Args:
            settings: Engine settings (default: loaded from the environment)
        """
        self.settings = settings or get_settings()
        self.methodology_version = METHODOLOGY_VERSION
        self._audit_log: list[AuditEntry] = []
        self._warnings: list[str] = []

    def _log_step(
        self,
        step: str,
        input_value: str,
        output_value: str,
        source: str,
        notes: Optional[str] = None
    ) -> None:
        """Add an entry to the audit log."""
        entry = AuditEntry(
            step=step,
            input_value=input_value,
            output_value=output_value,
            source=source,
            notes=notes,
        )
        self._audit_log.append(entry)
        logger.info(
            "calculation_step",
            step=step,
            input=input_value,
            output=output_value,
            source=source,
        )

    def _warn(self, message: str) -> None:
        if message not in self._warnings:
            self._warnings.append(message)
            logger.warning("division_warning", message=message)

    def calculate(
        self,
        personal_info: PersonalInfo,
        assets: Iterable[Asset],
        debts: Iterable[Debt],
        equity_factors: Optional[EquitableDistributionFactors] = None,
        financial_accounts: Optional[Iterable[FinancialAccount]] = None,
    ) -> PropertyDivision:
        """
        Classify and divide all assets and debts for one case.

        Args:
            personal_info: Jurisdiction and marriage timeline
            assets: Assets to divide
            debts: Debts to divide
            equity_factors: Factor bundle (used in equitable jurisdictions only)
            financial_accounts: Account records, divided as assets

        Returns:
            PropertyDivision with per-item reasoning and full audit trail
        """
        self._audit_log = []  # Reset audit log
        self._warnings = []

        assets = list(assets)
        debts = list(debts)
        accounts = list(financial_accounts or [])

        # Step 1: Jurisdiction
        jurisdiction = get_jurisdiction_info(personal_info.jurisdiction)
        self._log_step(
            step="jurisdiction",
            input_value=jurisdiction.code.value,
            output_value=jurisdiction.regime.value,
            source="State marital property registry",
            notes=jurisdiction.name,
        )
        if personal_info.has_prenup:
            self._warn(
                "A prenuptial agreement was reported; its terms may override "
                "this statutory division"
            )

        # Step 2: Classify
        classifier = PropertyClassifier(
            personal_info,
            default_separate_owner=self.settings.default_separate_owner,
        )
        divisible_assets = assets + [account.to_asset() for account in accounts]
        classified_assets = classifier.classify_all(divisible_assets)
        classified_debts = classifier.classify_all(debts)
        for classified in classified_assets + classified_debts:
            for message in classified.warnings:
                self._warn(message)

        # Step 3: Target ratio
        spouse1_ratio, adjustments = self._target_ratio(
            jurisdiction, personal_info, equity_factors
        )

        # Step 4: Allocate
        allocator = DivisionAllocator(
            spouse1_ratio=spouse1_ratio,
            equalization_threshold=self.settings.equalization_threshold,
        )
        allocation = allocator.allocate(classified_assets, classified_debts)
        self._log_allocation(jurisdiction, classified_assets, classified_debts, allocation)

        # Step 5: Confidence
        confidence = estimate_confidence(
            ConfidenceInputs(
                assets=assets,
                debts=debts,
                financial_accounts=accounts,
                personal_info=personal_info,
                equity_factors=equity_factors,
            )
        )
        self._log_step(
            step="confidence_level",
            input_value=f"{len(assets)} assets, {len(debts)} debts, {len(accounts)} accounts",
            output_value=str(confidence),
            source="Data completeness",
        )

        totals = allocation.totals
        summary = allocation.summary
        total_value = allocation.total_value
        self._log_step(
            step="division_complete",
            input_value=f"{jurisdiction.code.value} {jurisdiction.regime.value} division",
            output_value=(
                f"spouse1={total_value[Spouse.SPOUSE1]}, "
                f"spouse2={total_value[Spouse.SPOUSE2]}"
            ),
            source="EquiSplit Core Calculator",
        )

        return PropertyDivision(
            jurisdiction=jurisdiction.code,
            distribution_type=jurisdiction.regime,
            spouse1_assets=allocation.spouse1_assets,
            spouse2_assets=allocation.spouse2_assets,
            spouse1_debts=allocation.spouse1_debts,
            spouse2_debts=allocation.spouse2_debts,
            asset_divisions=allocation.asset_divisions,
            debt_divisions=allocation.debt_divisions,
            total_spouse1_value=total_value[Spouse.SPOUSE1],
            total_spouse2_value=total_value[Spouse.SPOUSE2],
            spouse1_share=float(spouse1_ratio),
            spouse2_share=float(Decimal("1") - spouse1_ratio),
            total_marital_assets=totals.community_assets,
            total_marital_debts=totals.community_debts,
            total_separate_assets=totals.separate_assets,
            total_separate_debts=totals.separate_debts,
            equalization_payment=summary.equalization_payment,
            payment_from=summary.payment_from,
            summary=summary,
            equity_adjustments=adjustments,
            confidence_level=confidence,
            audit_log=self._audit_log,
            warnings=self._warnings,
            methodology_version=self.methodology_version,
        )

    def _target_ratio(
        self,
        jurisdiction: JurisdictionInfo,
        personal_info: PersonalInfo,
        equity_factors: Optional[EquitableDistributionFactors],
    ) -> tuple[Decimal, list[FactorAdjustment]]:
        """Spouse 1's share of the net community estate."""
        if jurisdiction.regime is PropertyRegime.COMMUNITY:
            self._log_step(
                step="split_ratio",
                input_value="community property",
                output_value=str(COMMUNITY_RATIO),
                source=f"{jurisdiction.name} community property law",
                notes="Equity factors do not apply" if equity_factors else None,
            )
            return COMMUNITY_RATIO, []

        factors = self._resolve_factors(jurisdiction, personal_info, equity_factors)
        result = evaluate_equity_factors(factors)
        for adjustment in result.adjustments:
            self._log_step(
                step=f"equity_factor_{adjustment.factor}",
                input_value=adjustment.description,
                output_value=str(adjustment.delta),
                source=f"{jurisdiction.name} equitable distribution factors",
            )
        if result.clamped:
            self._warn(
                f"Equity factors produced a {result.raw_score} share for spouse 1; "
                f"limited to {result.score}"
            )
        self._log_step(
            step="split_ratio",
            input_value=f"baseline {result.baseline}, {len(result.adjustments)} adjustments",
            output_value=str(result.score),
            source=f"{jurisdiction.name} equitable distribution",
        )
        return result.score, result.adjustments

    def _resolve_factors(
        self,
        jurisdiction: JurisdictionInfo,
        personal_info: PersonalInfo,
        equity_factors: Optional[EquitableDistributionFactors],
    ) -> EquitableDistributionFactors:
        """Fill gaps in the factor bundle for this case."""
        if equity_factors is None:
            self._warn(
                "No equitable distribution factors were provided; "
                "neutral factors were assumed"
            )
            equity_factors = EquitableDistributionFactors()

        updates: dict[str, Any] = {}
        if equity_factors.marriage_duration is None:
            derived = personal_info.marriage_duration_years
            if derived is not None:
                updates["marriage_duration"] = derived
                self._log_step(
                    step="marriage_duration",
                    input_value=(
                        f"{personal_info.marriage_date} to {personal_info.separation_date}"
                    ),
                    output_value=str(derived),
                    source="Derived from marriage and separation dates",
                )

        extension = equity_factors.jurisdiction_factors
        if extension is not None and extension.jurisdiction != jurisdiction.code.value:
            updates["jurisdiction_factors"] = None
            self._warn(
                f"{extension.jurisdiction} statutory factors do not apply in "
                f"{jurisdiction.name} and were ignored"
            )

        if updates:
            return equity_factors.model_copy(update=updates)
        return equity_factors

    def _log_allocation(
        self,
        jurisdiction: JurisdictionInfo,
        classified_assets: list[ClassifiedItem],
        classified_debts: list[ClassifiedItem],
        allocation: Allocation,
    ) -> None:
        source = f"{jurisdiction.name} {jurisdiction.regime.value} property rules"
        for classified, division in zip(classified_assets, allocation.asset_divisions):
            self._log_step(
                step=f"asset_{classified.item.id}",
                input_value=str(division.total_value),
                output_value=f"spouse1={division.spouse1_share}, spouse2={division.spouse2_share}",
                source=source,
                notes=division.reasoning,
            )
        for classified, division in zip(classified_debts, allocation.debt_divisions):
            self._log_step(
                step=f"debt_{classified.item.id}",
                input_value=str(division.total_balance),
                output_value=f"spouse1={division.spouse1_share}, spouse2={division.spouse2_share}",
                source=source,
                notes=division.reasoning,
            )

        totals = allocation.totals
        self._log_step(
            step="net_community_estate",
            input_value=f"{totals.community_assets} - {totals.community_debts}",
            output_value=str(totals.net_community),
            source="Sum of community and quasi-community items",
        )
        summary = allocation.summary
        if summary.equalization_payment is not None:
            self._log_step(
                step="equalization_payment",
                input_value=(
                    f"held={totals.held[summary.payment_from]}, "
                    f"entitled={totals.notional[summary.payment_from]}"
                ),
                output_value=str(summary.equalization_payment),
                source="Titled community property exceeds notional share",
                notes=f"Paid by {summary.payment_from.label} to {summary.payment_to.label}",
            )


def classify_and_divide(
    personal_info: Any,
    assets: Optional[Iterable[Any]],
    debts: Optional[Iterable[Any]],
    equity_factors: Optional[Any] = None,
    *,
    financial_accounts: Optional[Iterable[Any]] = None,
    settings: Optional[EquiSplitSettings] = None,
) -> PropertyDivision:
    """
    Classify and divide a couple's property.

    Identical inputs and settings give identical results. When ``settings``
    is omitted they are loaded on every call from ``EQUISPLIT_*`` environment
    variables and any ``.env`` file in the current working directory; pass
    settings explicitly to make the result independent of the process
    environment.

    Args:
        personal_info: PersonalInfo or dict
        assets: Assets (models or dicts)
        debts: Debts (models or dicts)
        equity_factors: EquitableDistributionFactors or dict, for equitable states
        financial_accounts: FinancialAccount records (models or dicts)
        settings: Engine settings (default: loaded from the environment)

    Returns:
        PropertyDivision

    Raises:
        UnknownJurisdictionError: If the jurisdiction code is not recognized
        ValidationError: If any input fails validation
        ConfigurationError: If settings loaded from the environment are invalid
    """
    info = coerce_model(PersonalInfo, personal_info, field="personal_info")
    asset_models = coerce_models(Asset, assets, field="assets")
    debt_models = coerce_models(Debt, debts, field="debts")
    account_models = coerce_models(
        FinancialAccount, financial_accounts, field="financial_accounts"
    )
    factors = None
    if equity_factors is not None:
        factors = coerce_model(
            EquitableDistributionFactors, equity_factors, field="equity_factors"
        )

    calculator = PropertyDivisionCalculator(settings)
    return calculator.calculate(
        info,
        asset_models,
        debt_models,
        equity_factors=factors,
        financial_accounts=account_models,
    )

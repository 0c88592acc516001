"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from trumpaccount import __version__
from trumpaccount.config import PolicyConfig
from trumpaccount.core.analysis import (
    calculate_cost_of_waiting,
    calculate_inflation_comparison,
    calculate_milestones,
    compare_employer_contribution,
)
from trumpaccount.core.comparison import account_types, compare_account_growth
from trumpaccount.core.fees import calculate_expense_leakage, compare_fund_costs, eligible_funds
from trumpaccount.core.grants import check_grant_eligibility
from trumpaccount.core.growth import calculate_phased_growth, effective_phases
from trumpaccount.core.lifetime import calculate_lifetime_growth
from trumpaccount.core.reference_data import (
    grants_data_source,
    load_funds,
    load_grants,
    load_zip_incomes,
)
from trumpaccount.core.tax import calculate_withdrawal, generate_withdrawal_timeline
from trumpaccount.domain.phases import PhaseValidationError, validate_phases
from trumpaccount.schemas.calculators import (
    AccountComparisonRequest,
    CostOfWaitingRequest,
    EmployerRequest,
    ExpenseLeakageRequest,
    FundComparisonRequest,
    GrowthRequest,
    GrowthResponse,
    InflationRequest,
    LifetimeRequest,
    MilestoneRequest,
    WithdrawalRequest,
    WithdrawalTimelineRequest,
)
from trumpaccount.schemas.ping import PingResponse

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(PhaseValidationError)
def _handle_phase_error(exc: PhaseValidationError):
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _policy() -> PolicyConfig:
    return current_app.config["POLICY"]


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong", version=__version__)
    return jsonify(response.model_dump())


@api_bp.get("/policy")
def policy() -> Any:
    """Policy constants the calculators are currently using."""
    return jsonify(_policy().model_dump())


@api_bp.post("/calc/growth")
def growth() -> Any:
    payload = GrowthRequest.model_validate(_payload())
    warnings = validate_phases(effective_phases(payload), payload.startAge, payload.endAge)
    result = calculate_phased_growth(payload, _policy())
    return jsonify(GrowthResponse(result=result, warnings=warnings).model_dump())


@api_bp.post("/calc/lifetime")
def lifetime() -> Any:
    payload = LifetimeRequest.model_validate(_payload())
    policy = _policy()
    warnings = validate_phases(
        effective_phases(payload.model_copy(update={"endAge": policy.conversionAge})),
        payload.startAge,
        policy.conversionAge,
    )
    result = calculate_lifetime_growth(payload, policy)
    return jsonify(GrowthResponse(result=result, warnings=warnings).model_dump())


@api_bp.post("/calc/cost-of-waiting")
def cost_of_waiting() -> Any:
    payload = CostOfWaitingRequest.model_validate(_payload())
    return jsonify(calculate_cost_of_waiting(payload, _policy()).model_dump())


@api_bp.post("/calc/milestones")
def milestones() -> Any:
    payload = MilestoneRequest.model_validate(_payload())
    return jsonify(calculate_milestones(payload, _policy()).model_dump())


@api_bp.post("/calc/inflation")
def inflation() -> Any:
    payload = InflationRequest.model_validate(_payload())
    return jsonify(calculate_inflation_comparison(payload).model_dump())


@api_bp.post("/calc/employer")
def employer() -> Any:
    payload = EmployerRequest.model_validate(_payload())
    return jsonify(compare_employer_contribution(payload, _policy()).model_dump())


@api_bp.post("/calc/withdrawal")
def withdrawal() -> Any:
    payload = WithdrawalRequest.model_validate(_payload())
    scenario = calculate_withdrawal(
        age=payload.age,
        balance=payload.balance,
        withdrawal_amount=payload.withdrawalAmount,
        other_income=payload.otherIncome,
        filing_status=payload.filingStatus,
        brackets=payload.brackets,
        policy=_policy(),
    )
    return jsonify(scenario.model_dump())


@api_bp.post("/calc/withdrawal-timeline")
def withdrawal_timeline() -> Any:
    payload = WithdrawalTimelineRequest.model_validate(_payload())
    scenarios = generate_withdrawal_timeline(
        current_balance=payload.currentBalance,
        annual_return=payload.annualReturn,
        other_income=payload.otherIncome,
        withdrawal_percentage=payload.withdrawalPercentage,
        filing_status=payload.filingStatus,
        brackets=payload.brackets,
        policy=_policy(),
    )
    return jsonify([scenario.model_dump() for scenario in scenarios])


@api_bp.post("/calc/expense-leakage")
def expense_leakage() -> Any:
    payload = ExpenseLeakageRequest.model_validate(_payload())
    points = calculate_expense_leakage(
        initial_balance=payload.initialBalance,
        annual_contribution=payload.annualContribution,
        annual_return=payload.annualReturn,
        expense_ratio=payload.expenseRatio,
        years=payload.years,
    )
    return jsonify([point.model_dump() for point in points])


@api_bp.post("/calc/fund-comparison")
def fund_comparison() -> Any:
    payload = FundComparisonRequest.model_validate(_payload())
    funds = {fund.ticker: fund for fund in load_funds()}
    fund = funds.get(payload.ticker.upper())
    if fund is None:
        return jsonify({"error": [f"unknown fund {payload.ticker}"]}), HTTPStatus.NOT_FOUND

    comparison = compare_fund_costs(
        fund=fund,
        comparison_expense_ratio=payload.comparisonExpenseRatio,
        initial_balance=payload.initialBalance,
        annual_contribution=payload.annualContribution,
        annual_return=payload.annualReturn,
        years=payload.years,
    )
    return jsonify(comparison.model_dump())


@api_bp.post("/calc/accounts")
def accounts() -> Any:
    payload = AccountComparisonRequest.model_validate(_payload())
    policy = _policy()
    rows = compare_account_growth(
        annual_contribution=payload.annualContribution,
        annual_return=payload.annualReturn,
        years=payload.years,
        birth_year=payload.birthYear,
        include_pilot_deposit=payload.includePilotDeposit,
        policy=policy,
    )
    return jsonify(
        {
            "accountTypes": {key: account.model_dump() for key, account in account_types(policy).items()},
            "projections": [row.model_dump() for row in rows],
        }
    )


@api_bp.get("/funds")
def funds() -> Any:
    """Index funds that satisfy the fee ceiling."""
    return jsonify([fund.model_dump() for fund in eligible_funds(load_funds(), _policy())])


@api_bp.get("/grants/<zip_code>")
def grants(zip_code: str) -> Any:
    result = check_grant_eligibility(zip_code, load_zip_incomes(), load_grants())
    body = result.model_dump()
    body["dataSource"] = grants_data_source()
    return jsonify(body)

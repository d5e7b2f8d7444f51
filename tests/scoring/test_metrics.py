from __future__ import annotations

from datetime import date

import pytest

from src.models.trade import Trade
from src.scoring.errors import ComputationFault
from src.scoring.metrics import annualized_roi, days_to_expiration, derive_metrics


def _trade(**overrides) -> Trade:
    payload = {
        "symbol": "AAPL",
        "tradeDate": "2024-01-01",
        "expirationDate": "2024-01-11",
        "type": "put",
        "strike": 100.0,
        "bid": 1.0,
        "beta": 1.1,
        "delta": 0.25,
    }
    payload.update(overrides)
    return Trade.model_validate(payload)


def test_days_to_expiration_counts_calendar_days():
    assert days_to_expiration(date(2024, 1, 1), date(2024, 1, 11)) == 10
    assert days_to_expiration(date(2024, 2, 28), date(2024, 3, 1)) == 2


@pytest.mark.parametrize("expiration", ["2024-01-01", "2023-12-15"])
def test_days_to_expiration_never_below_one(expiration):
    metrics = derive_metrics(_trade(expirationDate=expiration))

    assert metrics.dte == 1


def test_put_metrics():
    metrics = derive_metrics(_trade(bid=1.25))

    assert metrics.premium == pytest.approx(125.0)
    assert metrics.breakeven == pytest.approx(98.75)
    assert metrics.collateral_at_risk == pytest.approx(10000.0)
    assert metrics.annual_roi == pytest.approx((1.25 / 100) * (365 / 10))
    assert metrics.support_variance_pct is None


def test_call_breakeven_adds_bid():
    metrics = derive_metrics(_trade(type="call", bid=1.25))

    assert metrics.breakeven == pytest.approx(101.25)


def test_hard_fail_example_roi():
    metrics = derive_metrics(_trade())

    assert metrics.dte == 10
    assert metrics.annual_roi == pytest.approx(0.365)


def test_zero_strike_yields_zero_roi():
    assert annualized_roi(1.0, 0.0, 10) == 0.0
    metrics = derive_metrics(_trade(strike=0.0, supportLevel=90.0))

    assert metrics.annual_roi == 0.0
    assert metrics.support_variance_pct is None


def test_support_variance_only_for_puts():
    put_metrics = derive_metrics(_trade(supportLevel=90.0))
    call_metrics = derive_metrics(_trade(type="call", supportLevel=90.0))

    assert put_metrics.support_variance_pct == pytest.approx(-10.0)
    assert call_metrics.support_variance_pct is None


def test_contract_multiplier_is_configurable():
    metrics = derive_metrics(_trade(bid=2.0), contract_multiplier=10)

    assert metrics.premium == pytest.approx(20.0)
    assert metrics.collateral_at_risk == pytest.approx(1000.0)


def test_overflowing_metric_raises_fault():
    with pytest.raises(ComputationFault) as excinfo:
        derive_metrics(_trade(bid=1e307))

    assert excinfo.value.metric == "premium"


def test_trade_rejects_non_finite_inputs():
    with pytest.raises(ValueError):
        _trade(bid=float("nan"))

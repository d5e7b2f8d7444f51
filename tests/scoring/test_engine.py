from __future__ import annotations

import pytest

from src.models import EvaluatedTrade, Suggestion, TradeError, serialize_results
from src.scoring.engine import TradeEvaluator, evaluate
from src.scoring.errors import EmptyInput, InvalidPolicy
from src.scoring.report import round_half_up


def build_trade(**overrides) -> dict:
    trade = {
        "symbol": "AAPL",
        "tradeDate": "2024-03-01",
        "expirationDate": "2024-03-31",
        "type": "put",
        "strike": 150.0,
        "bid": 5.0,
        "beta": 1.0,
        "delta": 0.2,
    }
    trade.update(overrides)
    return trade


FULL_TOLERANCES = {"minROI": 0.3, "maxDelta": 0.3, "maxDTE": 45, "maxBeta": 1.5}


def test_hard_fail_short_circuits_scoring():
    trade = build_trade(strike=100.0, bid=1.0, tradeDate="2024-01-01", expirationDate="2024-01-11")
    [result] = evaluate({"minROI": 0.5}, [trade])

    assert isinstance(result, EvaluatedTrade)
    assert result.dte == 10
    assert result.annual_roi == pytest.approx(0.365)
    assert result.hard_fail is True
    assert result.score == 0
    assert result.suggestion == Suggestion.AGGRESSIVE
    assert len(result.breakdown) == 1
    component = result.breakdown[0]
    assert (component.key, component.max, component.earned) == ("roi-hard-fail", 35.0, 0.0)
    assert component.note == "Hard fail: ROI 36.5% < 50.0%"
    assert result.total_possible == 35.0
    assert result.points_final == 0


def test_default_hard_fail_threshold_applies_without_min_roi():
    [result] = evaluate({}, [build_trade(bid=3.0)])

    assert result.hard_fail is True
    assert result.breakdown[0].note == "Hard fail: ROI 24.3% < 30.0%"


def test_all_criteria_met_scores_full_marks():
    [result] = evaluate(FULL_TOLERANCES, [build_trade(supportLevel=170.0)])

    assert result.hard_fail is False
    assert [c.key for c in result.breakdown] == ["roi", "delta", "dte", "beta", "collateral", "support"]
    assert result.total_possible == 100.0
    assert result.points_before_penalties == 100.0
    assert result.penalties_applied == 0.0
    assert result.score == 100.0
    assert result.suggestion == Suggestion.CONSERVATIVE


def test_tiers_move_trade_into_neutral_bucket():
    [result] = evaluate(FULL_TOLERANCES, [build_trade(strike=350.0, bid=12.0, supportLevel=360.0)])

    earned = {c.key: c.earned for c in result.breakdown}
    assert earned["collateral"] == 5.0
    assert earned["support"] == 2.0
    assert result.score == 87.0
    assert result.suggestion == Suggestion.NEUTRAL


def test_exceedance_feeds_penalty_pool():
    [result] = evaluate({"maxDelta": 0.3}, [build_trade(delta=0.6)])

    delta = result.breakdown[0]
    assert delta.key == "delta"
    assert delta.earned == pytest.approx(6.25)
    assert result.total_possible == 35.0
    assert result.points_before_penalties == pytest.approx(16.25)
    assert result.penalties_applied == pytest.approx(7.5)
    assert result.points_final == pytest.approx(8.75)
    assert result.score == pytest.approx(25.0)
    assert result.suggestion == Suggestion.AGGRESSIVE


def test_penalty_pool_caps_at_fifteen_points():
    tolerances = {"maxDelta": 0.3, "maxDTE": 15, "maxBeta": 1.5}
    [result] = evaluate(tolerances, [build_trade(delta=0.6, beta=3.0)])

    assert result.penalties_applied == 15.0
    assert result.points_before_penalties == pytest.approx(6.25 + 3.75 + 1.25 + 10.0)
    assert result.points_final == pytest.approx(6.25)
    assert result.points_final <= result.points_before_penalties


def test_no_tolerances_scores_only_collateral():
    low, high = evaluate({}, [build_trade(), build_trade(strike=600.0, bid=20.0)])

    assert [c.key for c in low.breakdown] == ["collateral"]
    assert low.score == 100.0
    assert high.score == 20.0
    assert high.suggestion == Suggestion.AGGRESSIVE


def test_simple_policy_without_tolerances_scores_one_hundred():
    [result] = evaluate({}, [build_trade(bid=0.5)], policy={"preset": "simple"})

    assert result.hard_fail is False
    assert result.breakdown == []
    assert result.total_possible == 0
    assert result.score == 100.0
    assert result.suggestion == Suggestion.CONSERVATIVE


def test_simple_policy_uses_linear_falloff():
    evaluator = TradeEvaluator({"preset": "simple"})
    [result] = evaluator.evaluate({"minROI": 0.5, "maxDelta": 0.3}, [build_trade(delta=0.6)])

    assert evaluator.enabled_criteria == ["roi", "delta", "dte", "beta"]
    assert result.total_possible == 70.0
    assert result.penalties_applied == 0.0
    assert result.score == pytest.approx(67.8, abs=0.05)
    assert result.suggestion == Suggestion.NEUTRAL


def test_policy_weight_overrides():
    evaluator = TradeEvaluator({"weights": {"collateral": 20.0}})
    [result] = evaluator.evaluate({}, [build_trade(strike=350.0, bid=12.0)])

    assert result.breakdown[0].max == 20.0
    assert result.breakdown[0].earned == 10.0
    assert result.score == 50.0


def test_unknown_policy_preset_is_rejected():
    with pytest.raises(InvalidPolicy):
        TradeEvaluator({"preset": "yolo"})
    with pytest.raises(InvalidPolicy):
        TradeEvaluator({"criteria": ["roi", "vega"]})


@pytest.mark.parametrize("trades", [[], None, "AAPL"])
def test_empty_input_raises(trades):
    with pytest.raises(EmptyInput) as excinfo:
        evaluate({}, trades)

    assert str(excinfo.value) == "No trades provided"


def test_failing_trade_keeps_its_slot():
    trades = [
        build_trade(symbol="GOOD"),
        build_trade(symbol="HUGE", bid=1e307),
        {"symbol": "BAD", "strike": "abc"},
        42,
        build_trade(symbol="ALSO"),
    ]
    results = evaluate(FULL_TOLERANCES, trades)

    assert len(results) == 5
    assert isinstance(results[0], EvaluatedTrade)
    assert isinstance(results[1], TradeError)
    assert results[1].index == 1
    assert "premium" in results[1].error
    assert isinstance(results[2], TradeError)
    assert results[2].symbol == "BAD"
    assert isinstance(results[3], TradeError)
    assert results[3].symbol is None
    assert results[4].symbol == "ALSO"


def test_order_preserved_and_output_is_deterministic():
    trades = [build_trade(symbol=symbol, strike=strike, bid=strike / 25) for symbol, strike in
              [("A", 90.0), ("B", 240.0), ("C", 700.0), ("D", 130.0)]]

    first = serialize_results(evaluate(FULL_TOLERANCES, trades))
    second = serialize_results(evaluate(FULL_TOLERANCES, trades))

    assert [row["symbol"] for row in first] == ["A", "B", "C", "D"]
    assert first == second


@pytest.mark.parametrize(
    "tolerances",
    [
        {},
        FULL_TOLERANCES,
        {"maxDelta": 0.05, "maxDTE": 2, "maxBeta": 0.1},
        {"minROI": 0.31, "maxDelta": 0.9},
    ],
)
def test_score_invariants_hold(tolerances):
    trades = [
        build_trade(delta=delta, beta=beta, strike=strike, bid=strike / 20, supportLevel=strike * 1.07)
        for delta in (0.1, 0.45, 0.9)
        for beta in (0.5, 2.5)
        for strike in (50.0, 400.0, 900.0)
    ]
    trades.append(build_trade(expirationDate="2024-02-01", bid=0.1))

    for result in evaluate(tolerances, trades):
        assert result.dte >= 1
        assert 0.0 <= result.score <= 100.0
        assert result.points_final <= result.points_before_penalties
        for component in result.breakdown:
            assert 0.0 <= component.earned <= component.max


def test_ledger_ties_round_half_up():
    [result] = evaluate({"maxBeta": 1.5}, [build_trade(beta=6.0)])

    beta, collateral = result.breakdown
    assert beta.earned == pytest.approx(0.3125)
    assert collateral.earned == 10.0
    assert result.points_before_penalties == 10.32
    assert result.penalties_applied == 11.25
    assert result.points_final == 0.0


@pytest.mark.parametrize(
    ("value", "decimals", "expected"),
    [
        (10.3125, 2, 10.32),
        (0.125, 2, 0.13),
        (0.25, 1, 0.3),
        (1.005, 2, 1.0),
        (1e300, 4, 1e300),
    ],
)
def test_round_half_up(value, decimals, expected):
    assert round_half_up(value, decimals) == expected

"""Unit tests for the XIRR rate solver."""

from datetime import date

import pytest

from ledger_performance.config import SolverConfig
from ledger_performance.performance import CashFlow, solve, solve_xirr, xnpv


def _flows(*pairs: tuple[date, float]) -> list[CashFlow]:
    return [CashFlow(date=d, amount=amount) for d, amount in pairs]


class TestSolveXirrKnownRates:
    """Tests against rates that can be computed in closed form."""

    def test_single_period_ten_percent(self) -> None:
        """-1000 then +1100 a year (365 days) later is ~10% annualized."""
        flows = _flows((date(2023, 1, 1), -1000.0), (date(2024, 1, 1), 1100.0))

        rate = solve_xirr(flows)

        assert rate is not None
        assert rate == pytest.approx(0.10, abs=1e-3)
        # 365 days is slightly short of a 365.25-day year, so the exact rate is a bit above 10%.
        assert rate == pytest.approx(1.1 ** (365.25 / 365) - 1, abs=1e-6)

    def test_exact_year_day_count_gives_exactly_ten_percent(self) -> None:
        flows = _flows((date(2023, 1, 1), -1000.0), (date(2024, 1, 1), 1100.0))

        assert solve_xirr(flows, config=SolverConfig(days_in_year=365)) == pytest.approx(0.10, abs=1e-6)

    def test_multi_year_growth(self) -> None:
        start, end = date(2020, 1, 1), date(2022, 1, 1)
        flows = _flows((start, -1000.0), (end, 1210.0))

        expected = 1.21 ** (365.25 / (end - start).days) - 1
        assert solve_xirr(flows) == pytest.approx(expected, abs=1e-6)

    def test_negative_return(self) -> None:
        """Losing half in a year converges below zero even after an overshoot to the floor."""
        flows = _flows((date(2023, 1, 1), -1000.0), (date(2024, 1, 1), 500.0))

        rate = solve_xirr(flows)

        assert rate == pytest.approx(0.5 ** (365.25 / 365) - 1, abs=1e-6)

    def test_flow_order_does_not_matter(self) -> None:
        flows = _flows(
            (date(2021, 3, 1), -5000.0),
            (date(2021, 9, 15), -2000.0),
            (date(2022, 6, 30), 400.0),
            (date(2023, 12, 31), 8000.0),
        )

        assert solve_xirr(flows) == solve_xirr(list(reversed(flows)))

    def test_result_zeroes_npv(self) -> None:
        flows = _flows(
            (date(2021, 3, 1), -5000.0),
            (date(2021, 9, 15), -2000.0),
            (date(2022, 6, 30), 400.0),
            (date(2023, 12, 31), 8000.0),
        )

        rate = solve_xirr(flows)

        assert rate is not None
        assert xnpv(rate, flows) == pytest.approx(0.0, abs=1e-3)

    @pytest.mark.parametrize("guess", [-0.5, 0.0, 0.1, 1.0, 5.0])
    def test_initial_guess_does_not_change_root(self, guess: float) -> None:
        flows = _flows((date(2023, 1, 1), -1000.0), (date(2024, 1, 1), 1100.0))

        assert solve_xirr(flows, guess) == pytest.approx(1.1 ** (365.25 / 365) - 1, abs=1e-6)

    def test_solve_is_solve_xirr(self) -> None:
        assert solve is solve_xirr


class TestSolveXirrUnavailable:
    """Cases where no rate can be computed return None instead of raising."""

    def test_no_flows(self) -> None:
        assert solve_xirr([]) is None

    def test_single_flow(self) -> None:
        assert solve_xirr(_flows((date(2023, 1, 1), -1000.0))) is None

    def test_all_positive(self) -> None:
        flows = _flows((date(2023, 1, 1), 1000.0), (date(2024, 1, 1), 1100.0))
        assert solve_xirr(flows) is None

    def test_all_negative(self) -> None:
        flows = _flows((date(2023, 1, 1), -1000.0), (date(2024, 1, 1), -1100.0))
        assert solve_xirr(flows) is None

    def test_zero_amounts_have_no_sign_change(self) -> None:
        flows = _flows((date(2023, 1, 1), 0.0), (date(2024, 1, 1), 1100.0))
        assert solve_xirr(flows) is None

    def test_iteration_cap(self) -> None:
        flows = _flows((date(2023, 1, 1), -1000.0), (date(2024, 1, 1), 1100.0))

        assert solve_xirr(flows, config=SolverConfig(max_iterations=1)) is None

    def test_rate_beyond_clamp_range(self) -> None:
        """A 100x return in a year needs a rate above the +1000% ceiling."""
        flows = _flows((date(2023, 1, 1), -100.0), (date(2024, 1, 1), 10_000.0))

        assert solve_xirr(flows) is None

    def test_same_day_flows_with_net_loss_never_converge(self) -> None:
        """All flows at t=0 give a flat NPV; the solver nudges until the cap."""
        flows = _flows((date(2023, 1, 1), -100.0), (date(2023, 1, 1), 50.0))

        assert solve_xirr(flows) is None


class TestSolveXirrIterationRules:
    """Tests for the individual stopping rules."""

    def test_returns_guess_when_npv_already_zero(self) -> None:
        flows = _flows((date(2023, 1, 1), -100.0), (date(2023, 1, 1), 100.0))

        assert solve_xirr(flows, 0.25) == 0.25

    def test_guess_below_floor_is_clamped(self) -> None:
        flows = _flows((date(2023, 1, 1), -1000.0), (date(2024, 1, 1), 1100.0))

        assert solve_xirr(flows, -5.0) == pytest.approx(1.1 ** (365.25 / 365) - 1, abs=1e-6)

    def test_custom_config_does_not_leak_into_later_calls(self) -> None:
        flows = _flows((date(2023, 1, 1), -1000.0), (date(2024, 1, 1), 1100.0))

        assert solve_xirr(flows, config=SolverConfig(days_in_year=365)) == pytest.approx(0.10)
        assert solve_xirr(flows) == pytest.approx(1.1 ** (365.25 / 365) - 1, abs=1e-6)


class TestXnpv:
    """Tests for the NPV evaluator."""

    def test_zero_rate_is_plain_sum(self) -> None:
        flows = _flows((date(2023, 1, 1), -1000.0), (date(2024, 6, 1), 1100.0))

        assert xnpv(0.0, flows) == pytest.approx(100.0)

    def test_discounts_to_first_date(self) -> None:
        flows = _flows((date(2024, 1, 1), 1100.0), (date(2023, 1, 1), -1000.0))

        assert xnpv(0.1, flows, days_in_year=365) == pytest.approx(0.0, abs=1e-9)

    def test_empty_flows_raise(self) -> None:
        with pytest.raises(ValueError, match="at least one cash flow"):
            xnpv(0.1, [])

    @pytest.mark.parametrize("rate", [-1.0, -1.5])
    def test_rate_at_or_below_minus_one_raises(self, rate: float) -> None:
        flows = _flows((date(2023, 1, 1), -1000.0), (date(2024, 1, 1), 1100.0))

        with pytest.raises(ValueError, match="greater than -1"):
            xnpv(rate, flows)

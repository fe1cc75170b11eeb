"""Unit tests for the HalfCycleDetector."""

import pytest

from simcell.stress.cycle_detector import HalfCycleDetector

START = (30000.0, 15000.0)


def _detector() -> HalfCycleDetector:
    return HalfCycleDetector(nominal_capacity=2.0, reference=START)


class TestDirectionReversal:
    def test_no_cycle_on_monotonic_discharge(self):
        """A constant discharge current should not trigger a cycle."""
        det = _detector()
        for i in range(4):
            assert det.update(1.0, dt=60.0, averages=(30000.0 + i, 15000.0 - i)) is False

    def test_no_cycle_on_monotonic_charge(self):
        det = _detector()
        for _ in range(4):
            assert det.update(-1.0, dt=60.0, averages=START) is False

    def test_cycle_on_discharge_then_charge(self):
        det = _detector()
        det.update(1.0, dt=60.0, averages=START)
        result = det.update(-1.0, dt=60.0, averages=(30100.0, 14900.0))
        assert result is True
        assert det.last_cycle is not None

    def test_multiple_reversals(self):
        """Each reversal should produce a cycle."""
        det = _detector()
        det.update(-1.0, dt=60.0, averages=START)
        assert det.update(1.0, dt=60.0, averages=START) is True
        assert det.update(-1.0, dt=60.0, averages=START) is True


class TestReference:
    def test_reference_kept_until_reversal(self):
        det = _detector()
        det.update(1.0, dt=60.0, averages=(30100.0, 14900.0))
        assert det.reference == START

    def test_reference_moves_at_reversal(self):
        """The averages at the start of the reversing step become the new reference."""
        det = _detector()
        det.update(1.0, dt=60.0, averages=START)
        det.update(-1.0, dt=60.0, averages=(30200.0, 14800.0))
        assert det.reference == (30200.0, 14800.0)


class TestHalfCycle:
    def test_throughput_and_duration(self):
        det = _detector()
        det.update(2.0, dt=1800.0, averages=START)  # 1 Ah
        det.update(-1.0, dt=60.0, averages=START)  # reversal
        cycle = det.last_cycle
        assert cycle.charge_throughput == pytest.approx(1.0)
        assert cycle.duration == pytest.approx(1800.0)
        assert cycle.average_current == pytest.approx(2.0)

    def test_fec_is_half_relative_throughput(self):
        """FEC contribution should be throughput / (2 * nominal capacity)."""
        det = _detector()
        det.update(2.0, dt=3600.0, averages=START)  # 2 Ah = one nominal capacity
        det.update(-1.0, dt=60.0, averages=START)
        assert det.last_cycle.full_equivalent_cycles == pytest.approx(0.5)


class TestFECAccumulation:
    def test_total_fec_accumulates(self):
        det = _detector()
        det.update(2.0, dt=3600.0, averages=START)
        det.update(-2.0, dt=1800.0, averages=START)  # reversal 1: FEC 0.5
        fec1 = det.total_fec
        assert fec1 == pytest.approx(0.5)

        det.update(-2.0, dt=1800.0, averages=START)  # continue charge
        det.update(1.0, dt=60.0, averages=START)  # reversal 2: FEC 0.5
        assert det.total_fec == pytest.approx(fec1 + det.last_cycle.full_equivalent_cycles)
        assert det.total_fec == pytest.approx(1.0)

    def test_total_fec_zero_initially(self):
        assert _detector().total_fec == 0.0


class TestRestPeriods:
    def test_rest_does_not_trigger_cycle(self):
        det = _detector()
        det.update(1.0, dt=60.0, averages=START)
        assert det.update(0.0, dt=60.0, averages=START) is False

    def test_rest_does_not_affect_elapsed_time(self):
        """Rest periods should not contribute to the half-cycle duration."""
        det = _detector()
        det.update(1.0, dt=3600.0, averages=START)
        det.update(0.0, dt=7200.0, averages=START)  # rest
        det.update(-1.0, dt=60.0, averages=START)  # reversal
        assert det.last_cycle.duration == pytest.approx(3600.0)
        assert det.last_cycle.average_current == pytest.approx(1.0)

    def test_rest_between_movements_preserves_direction(self):
        det = _detector()
        det.update(-1.0, dt=60.0, averages=START)
        det.update(0.0, dt=60.0, averages=START)
        assert det.update(-1.0, dt=60.0, averages=START) is False
        assert det.update(1.0, dt=60.0, averages=START) is True
        assert det.last_cycle.duration == pytest.approx(120.0)

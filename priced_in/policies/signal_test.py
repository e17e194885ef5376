import pytest

from priced_in.domain.types import Signal
from priced_in.policies.signal import classify_signal
from priced_in.policies.signal import expectation_gap


class TestExpectationGap:
  """Tests for expectation_gap function."""

  def test_normal_case(self):
    """Expected minus implied."""
    assert expectation_gap(13.0, 14.77) == pytest.approx(-1.77)

  def test_undefined_implied_treated_as_zero(self):
    """Undefined implied growth counts as 0% by default."""
    assert expectation_gap(13.0, None) == 13.0

  def test_strict_mode_propagates_undefined(self):
    """Strict mode returns None instead of a misleading gap."""
    assert expectation_gap(13.0, None, strict=True) is None

  def test_strict_mode_with_value(self):
    """Strict mode does not change defined gaps."""
    assert expectation_gap(10.0, 4.0, strict=True) == 6.0


class TestClassifySignal:
  """Tests for classify_signal function."""

  @pytest.mark.parametrize('gap,signal', [
      (10.0, Signal.STRONG_BUY),
      (5.01, Signal.STRONG_BUY),
      (5.0, Signal.BUY),
      (3.0, Signal.BUY),
      (2.0, Signal.HOLD),
      (0.0, Signal.HOLD),
      (-2.0, Signal.HOLD),
      (-2.01, Signal.CAUTION),
      (-5.0, Signal.CAUTION),
      (-5.01, Signal.SELL),
      (-30.0, Signal.SELL),
  ])
  def test_bands(self, gap, signal):
    """Strict thresholds evaluated in priority order."""
    assert classify_signal(gap) is signal

  def test_undefined_gap(self):
    """None and NaN are not available."""
    assert classify_signal(None) is Signal.NOT_AVAILABLE
    assert classify_signal(float('nan')) is Signal.NOT_AVAILABLE

  def test_labels(self):
    """Display labels."""
    assert classify_signal(6.0).value == 'Strong Buy'
    assert classify_signal(None).value == 'N/A'

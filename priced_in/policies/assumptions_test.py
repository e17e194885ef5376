import pytest

from priced_in.domain.types import AssumptionSet
from priced_in.domain.types import PolicyOutput
from priced_in.policies.assumptions import AssumptionPolicy
from priced_in.policies.assumptions import default_assumptions
from priced_in.policies.assumptions import find_band
from priced_in.policies.assumptions import MarketCapBand
from priced_in.policies.assumptions import match_sector_multiple


class TestFindBand:
  """Tests for market-cap banding."""

  @pytest.mark.parametrize('market_cap,category', [
      (0.0, 'Micro Cap'),
      (499.0, 'Micro Cap'),
      (500.0, 'Small Cap'),
      (4_999.0, 'Small Cap'),
      (5_000.0, 'Mid Cap'),
      (19_999.0, 'Mid Cap'),
      (20_000.0, 'Large-Mid Cap'),
      (50_000.0, 'Large Cap'),
      (199_999.0, 'Large Cap'),
      (200_000.0, 'Mega Cap'),
      (2_000_000.0, 'Mega Cap'),
  ])
  def test_band_boundaries(self, market_cap, category):
    """Upper bounds are exclusive."""
    assert find_band(market_cap).category == category

  def test_adjacent_boundary_values_differ(self):
    """499 and 500 fall in different bands."""
    assert (default_assumptions(499, '').category !=
            default_assumptions(500, '').category)

  def test_table_without_catch_all(self):
    """A bounded last band leaves large caps uncovered."""
    bands = (MarketCapBand(100.0, 'Tiny', 5, 20.0, 10.0),)

    with pytest.raises(ValueError, match='No market-cap band'):
      find_band(1_000.0, bands)


class TestMatchSectorMultiple:
  """Tests for sector keyword matching."""

  @pytest.mark.parametrize('sector,multiple', [
      ('FMCG', 45.0),
      ('Indian IT Services', 22.0),
      ('Information Technology', 22.0),
      ('Pharmaceuticals', 30.0),
      ('Banking', 15.0),
      ('Retail', 40.0),
      ('Oil & Gas', 10.0),
  ])
  def test_known_sectors(self, sector, multiple):
    """Case-insensitive substring match."""
    value, _ = match_sector_multiple(sector)

    assert value == multiple

  def test_it_keyword_matched_by_substring(self):
    """'Indian IT Services' hits the 'it' entry."""
    _, keyword = match_sector_multiple('Indian IT Services')

    assert keyword == 'it'

  def test_first_match_wins(self):
    """'Capital Goods' contains 'it', which precedes 'capital goods'."""
    value, keyword = match_sector_multiple('Capital Goods')

    assert keyword == 'it'
    assert value == 22.0

  @pytest.mark.parametrize('sector', ['', None, 'Unknown'])
  def test_default_multiple(self, sector):
    """Empty, missing or unmatched sector uses 20x."""
    value, keyword = match_sector_multiple(sector)

    assert value == 20.0
    assert keyword is None

  def test_custom_table(self):
    """Injected table replaces the built-in one."""
    value, keyword = match_sector_multiple('Software', (('soft', 50.0),))

    assert value == 50.0
    assert keyword == 'soft'


class TestDefaultAssumptions:
  """Tests for default_assumptions function."""

  def test_large_cap_fmcg(self):
    """Large-cap FMCG defaults."""
    result = default_assumptions(93_798.0, 'FMCG')

    assert result == AssumptionSet(
        forecast_years=10,
        discount_rate_pct=15.0,
        terminal_growth_pct=4.0,
        exit_multiple=45.0,
        expected_growth_pct=12.0,
        category='Large Cap',
    )

  def test_micro_cap(self):
    """Micro caps get a 20-year horizon at 20%."""
    result = default_assumptions(100.0, 'Textiles')

    assert result.forecast_years == 20
    assert result.discount_rate_pct == 20.0
    assert result.expected_growth_pct == 25.0
    assert result.exit_multiple == 15.0

  def test_mega_cap(self):
    """Mega caps get a 10-year horizon at 13%."""
    result = default_assumptions(500_000.0, None)

    assert result.category == 'Mega Cap'
    assert result.discount_rate_pct == 13.0
    assert result.expected_growth_pct == 10.0
    assert result.exit_multiple == 20.0

  def test_stable(self):
    """Same inputs, same outputs."""
    assert default_assumptions(12_345.0, 'Cement') == default_assumptions(
        12_345.0, 'Cement')


class TestAssumptionPolicy:
  """Tests for AssumptionPolicy."""

  def test_basic_usage(self):
    """Policy output agrees with the plain function."""
    policy = AssumptionPolicy()
    result = policy.compute(93_798.0, 'FMCG')

    assert isinstance(result, PolicyOutput)
    assert result.value == default_assumptions(93_798.0, 'FMCG')
    assert result.diag['assumption_method'] == 'band_sector_lookup'
    assert result.diag['category'] == 'Large Cap'
    assert result.diag['sector_keyword'] == 'fmcg'
    assert result.diag['default_multiple_used'] is False

  def test_default_multiple_flagged(self):
    """Unmatched sector is visible in diagnostics."""
    result = AssumptionPolicy().compute(1_000.0, '')

    assert result.value.exit_multiple == 20.0
    assert result.diag['default_multiple_used'] is True
    assert result.diag['sector_keyword'] is None

  def test_custom_tables(self):
    """Custom bands, sectors and terminal growth."""
    policy = AssumptionPolicy(
        bands=(MarketCapBand(None, 'All', 8, 11.0, 9.0),),
        sector_multiples=(('bank', 12.0),),
        default_multiple=18.0,
        terminal_growth_pct=3.0,
    )

    bank = policy.compute(10.0, 'Private Bank').value
    other = policy.compute(10.0, 'FMCG').value

    assert bank.exit_multiple == 12.0
    assert bank.forecast_years == 8
    assert bank.terminal_growth_pct == 3.0
    assert other.exit_multiple == 18.0
    assert other.category == 'All'

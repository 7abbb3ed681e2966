"""
Test basic imports and module structure.

These tests ensure all core modules can be imported without errors
and basic functionality is available.
"""

import pytest


@pytest.mark.unit
@pytest.mark.smoke
def test_package_import():
    """Test that the package exposes its version and main types."""
    import election_timeseries

    assert election_timeseries.__version__
    assert election_timeseries.TimeSeriesReport is not None
    assert election_timeseries.VotingTimeSeries is not None


@pytest.mark.unit
@pytest.mark.smoke
def test_data_import():
    """Test that data module imports successfully."""
    from election_timeseries.data import (
        VotingSnapshot,
        VotingTimeSeries,
        load_time_series,
    )

    assert VotingSnapshot is not None
    assert VotingTimeSeries is not None
    assert load_time_series is not None


@pytest.mark.unit
@pytest.mark.smoke
def test_analysis_import():
    """Test that analysis module imports successfully."""
    from election_timeseries.analysis import FindFraud, LostVotes

    assert FindFraud is not None
    assert LostVotes is not None


@pytest.mark.unit
@pytest.mark.smoke
def test_report_import():
    """Test that report module imports successfully."""
    from election_timeseries.report import (
        AnnotatedTimeSeriesReport,
        SortCriteria,
        TimeSeriesReport,
        write_csv,
    )

    assert AnnotatedTimeSeriesReport is not None
    assert SortCriteria is not None
    assert TimeSeriesReport is not None
    assert write_csv is not None


@pytest.mark.unit
@pytest.mark.smoke
def test_error_hierarchy():
    """Test that input errors are ValueErrors and precondition errors are not."""
    from election_timeseries.exceptions import (
        ParseError,
        PreconditionError,
        ValidationError,
    )

    assert issubclass(ValidationError, ValueError)
    assert issubclass(ParseError, ValueError)
    assert not issubclass(PreconditionError, ValueError)

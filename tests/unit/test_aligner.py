"""Tests for ndvicycle.aligner."""

import pytest

from ndvicycle.aligner import align, align_entity
from ndvicycle.exceptions import IndexOutOfRange, MismatchedSeriesLength
from ndvicycle.records import AlignedSeries, MeasurementRecord


def make_records(pairs):
    return tuple(MeasurementRecord(date=d, value=v) for d, v in pairs)


class TestAlign:
    """Tests for align()."""

    def test_reference_scenario(self):
        """Newest-first inputs come out oldest-first and position-matched."""
        ndvi = make_records([(3, 0.5), (2, 0.4), (1, 0.3)])
        precip = make_records([(3, 1.0), (2, 0.0), (1, 2.0)])

        series = align(ndvi, precip)

        assert series.labels == (1, 2, 3)
        assert series.primary == (0.3, 0.4, 0.5)
        assert series.secondary == (2.0, 0.0, 1.0)

    def test_lengths_match_input(self):
        """All three outputs have the input length."""
        n = 7
        ndvi = make_records([(n - i, i / 10) for i in range(n)])
        precip = make_records([(n - i, float(i)) for i in range(n)])

        series = align(ndvi, precip)

        assert len(series) == n
        assert len(series.labels) == len(series.primary) == len(series.secondary) == n

    def test_label_i_comes_from_mirrored_record(self):
        """labels[i] is the date of input record L-1-i."""
        ndvi = make_records([("d", 0.4), ("c", 0.3), ("b", 0.2), ("a", 0.1)])
        precip = make_records([("d", 4), ("c", 3), ("b", 2), ("a", 1)])

        series = align(ndvi, precip)

        for i, label in enumerate(series.labels):
            assert label == ndvi[len(ndvi) - 1 - i].date
            assert series.primary[i] == ndvi[len(ndvi) - 1 - i].value

    def test_no_sorting_by_date(self):
        """Out-of-order dates are reversed, not sorted."""
        ndvi = make_records([(1, 0.1), (3, 0.3), (2, 0.2)])
        precip = make_records([(1, 0.0), (3, 0.0), (2, 0.0)])

        assert align(ndvi, precip).labels == (2, 3, 1)

    def test_reversing_output_restores_input_order(self):
        """Aligning a reversed copy of the output reproduces the input order."""
        ndvi = make_records([(3, 0.5), (2, 0.4), (1, 0.3)])
        precip = make_records([(3, 1.0), (2, 0.0), (1, 2.0)])
        first = align(ndvi, precip)

        ndvi_again = make_records(zip(reversed(first.labels), reversed(first.primary)))
        precip_again = make_records(zip(reversed(first.labels), reversed(first.secondary)))
        second = align(ndvi_again, precip_again)

        assert second == first
        assert tuple(reversed(second.labels)) == tuple(r.date for r in ndvi)

    def test_values_pass_through_unchanged(self):
        """Values keep their type and precision."""
        ndvi = make_records([(2, 1), (1, 0.123456789)])
        precip = make_records([(2, 3), (1, 0.1)])

        series = align(ndvi, precip)

        assert series.primary == (0.123456789, 1)
        assert isinstance(series.primary[1], int)

    def test_empty_inputs(self):
        """Two empty series align to an empty result."""
        series = align([], [])
        assert series == AlignedSeries()
        assert len(series) == 0

    def test_mismatched_lengths_raise(self):
        """Lengths 3 and 4 cannot be aligned."""
        ndvi = make_records([(3, 0.5), (2, 0.4), (1, 0.3)])
        precip = make_records([(4, 0.0), (3, 1.0), (2, 0.0), (1, 2.0)])

        with pytest.raises(MismatchedSeriesLength) as exc_info:
            align(ndvi, precip)

        assert exc_info.value.entity_length == 3
        assert exc_info.value.external_length == 4

    def test_inputs_not_modified(self):
        """align does not reorder list inputs in place."""
        ndvi = list(make_records([(2, 0.2), (1, 0.1)]))
        precip = list(make_records([(2, 1.0), (1, 0.0)]))
        before = (list(ndvi), list(precip))

        align(ndvi, precip)

        assert (ndvi, precip) == before


class TestAlignEntity:
    """Tests for align_entity()."""

    def test_selects_entity_by_index(self, entities, precip):
        """The requested field is aligned against precipitation."""
        series = align_entity(entities, 1, precip)

        assert series.labels == ("2017-05-20", "2017-06-05", "2017-06-21")
        assert series.primary == (0.29, 0.41, 0.44)
        assert series.secondary == (1.35, 0.0, 0.12)

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_index_out_of_range(self, entities, precip, index):
        with pytest.raises(IndexOutOfRange):
            align_entity(entities, index, precip)

"""Tests for riskbook.portfolio.correlation — validation and matrix sources."""

from __future__ import annotations

import math

import numpy as np
import pytest

from riskbook.portfolio.correlation import (
    correlation_matrix_from_returns,
    parse_matrix_text,
    pearson_correlation,
    validate_correlation_matrix,
)


class TestValidateCorrelationMatrix:
    def test_identity_accepted(self, identity_2):
        corr = validate_correlation_matrix(identity_2, 2)
        assert isinstance(corr, np.ndarray)
        assert corr.shape == (2, 2)

    def test_valid_3x3(self, corr_3):
        corr = validate_correlation_matrix(corr_3, 3)
        assert corr[0, 2] == -0.2

    def test_empty_for_zero_assets(self):
        assert validate_correlation_matrix([], 0).shape == (0, 0)

    def test_wrong_row_count(self):
        with pytest.raises(ValueError, match="wrong number of rows"):
            validate_correlation_matrix([[1.0, 0.0]], 2)

    def test_wrong_column_count(self):
        with pytest.raises(ValueError, match="wrong number of columns"):
            validate_correlation_matrix([[1.0, 0.0], [0.0]], 2)

    def test_flat_list_rejected(self):
        with pytest.raises(ValueError, match="wrong number of columns"):
            validate_correlation_matrix([1.0], 1)

    def test_scalar_rejected(self):
        with pytest.raises(ValueError, match="wrong number of rows"):
            validate_correlation_matrix(1.0, 1)

    def test_one_dimensional_array_rejected(self):
        with pytest.raises(ValueError, match="wrong number of columns"):
            validate_correlation_matrix(np.array([1.0, 0.0]), 2)

    def test_diagonal_not_one(self):
        with pytest.raises(ValueError, match="diagonal must be 1"):
            validate_correlation_matrix([[0.9, 0.0], [0.0, 1.0]], 2)

    def test_diagonal_within_tolerance(self):
        validate_correlation_matrix([[1.0 + 1e-12, 0.0], [0.0, 1.0]], 2)

    def test_out_of_range(self):
        with pytest.raises(ValueError, match=r"\[-1, 1\]"):
            validate_correlation_matrix([[1.0, 1.2], [1.2, 1.0]], 2)

    def test_out_of_range_lower_triangle_only(self):
        with pytest.raises(ValueError, match=r"\[-1, 1\]"):
            validate_correlation_matrix([[1.0, 0.5], [-1.5, 1.0]], 2)

    def test_boundary_values_accepted(self):
        validate_correlation_matrix([[1.0, -1.0], [-1.0, 1.0]], 2)

    def test_asymmetric(self):
        with pytest.raises(ValueError, match="symmetric"):
            validate_correlation_matrix([[1.0, 0.3], [0.2, 1.0]], 2)

    def test_asymmetry_within_tolerance(self):
        validate_correlation_matrix([[1.0, 0.3], [0.3 + 1e-12, 1.0]], 2)

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError, match="finite"):
            validate_correlation_matrix([[1.0, math.nan], [math.nan, 1.0]], 2)

    def test_input_not_modified(self):
        m = [[1.0, 0.3], [0.3, 1.0]]
        validate_correlation_matrix(m, 2)
        assert m == [[1.0, 0.3], [0.3, 1.0]]


class TestParseMatrixText:
    def test_whitespace_and_commas(self):
        assert parse_matrix_text("1 0.3\n0.3, 1\n") == [[1.0, 0.3], [0.3, 1.0]]

    def test_blank_lines_skipped(self):
        assert parse_matrix_text("\n1\t0\n\n  0 1  \n\n") == [[1.0, 0.0], [0.0, 1.0]]

    def test_ragged_rows_kept(self):
        assert parse_matrix_text("1 0\n1\n") == [[1.0, 0.0], [1.0]]

    def test_invalid_token(self):
        with pytest.raises(ValueError, match="matrix line 2"):
            parse_matrix_text("1 0\n0 x\n")

    def test_empty_text(self):
        assert parse_matrix_text("") == []


class TestPearsonCorrelation:
    def test_perfect_positive(self):
        assert pearson_correlation([1, 2, 3, 4], [2, 4, 6, 8]) == pytest.approx(1.0)

    def test_perfect_negative(self):
        assert pearson_correlation([1, 2, 3, 4], [4, 3, 2, 1]) == pytest.approx(-1.0)

    def test_matches_numpy(self, correlated_returns):
        a, b, _ = correlated_returns
        assert pearson_correlation(a, b) == pytest.approx(np.corrcoef(a, b)[0, 1])

    def test_constant_series_is_zero(self):
        assert pearson_correlation([1.0, 1.0, 1.0], [1.0, 2.0, 3.0]) == 0.0

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            pearson_correlation([1.0, 2.0], [1.0, 2.0, 3.0])

    def test_too_short(self):
        with pytest.raises(ValueError):
            pearson_correlation([1.0], [2.0])


class TestCorrelationMatrixFromReturns:
    def test_shape_and_diagonal(self, correlated_returns):
        corr = correlation_matrix_from_returns(correlated_returns)
        assert len(corr) == 3
        assert all(corr[i][i] == 1.0 for i in range(3))
        validate_correlation_matrix(corr, 3)

    def test_factor_signs(self, correlated_returns):
        corr = correlation_matrix_from_returns(correlated_returns)
        assert corr[0][1] > 0.5
        assert corr[0][2] < 0.0

    def test_tail_alignment(self, correlated_returns):
        a, b, _ = correlated_returns
        longer = [0.5] * 10 + a
        corr = correlation_matrix_from_returns([longer, b])
        assert corr[0][1] == pytest.approx(pearson_correlation(a, b))

    def test_empty(self):
        assert correlation_matrix_from_returns([]) == []

    def test_too_short(self):
        with pytest.raises(ValueError, match="not enough aligned returns"):
            correlation_matrix_from_returns([[0.01] * 30, [0.02] * 10])

    def test_custom_min_length(self):
        corr = correlation_matrix_from_returns([[0.01, 0.02, 0.03], [0.03, 0.02, 0.01]], min_length=3)
        assert corr[0][1] == pytest.approx(-1.0)

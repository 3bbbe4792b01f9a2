"""Unit tests for diagnostics module."""

import pytest

from diagnostics import Diagnostic, Diagnostics, NetSpecError, TopologyError


class TestDiagnostics:
    """Tests for the diagnostics collector."""

    def test_empty(self):
        """Test a new collector has nothing to report."""
        diagnostics = Diagnostics()
        assert len(diagnostics) == 0
        assert not diagnostics.has_errors
        assert not diagnostics.has_warnings

    def test_severities(self):
        """Test counting by severity."""
        diagnostics = Diagnostics()
        diagnostics.warn("boundary", "net is not closed")
        diagnostics.info("edge_count", "just saying")
        diagnostics.error("edge_route", "no route")
        assert diagnostics.warning_count == 1
        assert diagnostics.error_count == 1
        assert diagnostics.has_errors
        assert [d.severity for d in diagnostics] == ["warning", "info", "error"]

    def test_details(self):
        """Test keyword details are kept."""
        diagnostics = Diagnostics()
        d = diagnostics.warn("edge_count", "expected 9 edges", expected=9, found=8)
        assert d.details == {"expected": 9, "found": 8}

    def test_by_category(self):
        """Test filtering by category."""
        diagnostics = Diagnostics()
        diagnostics.warn("boundary", "one")
        diagnostics.warn("convergence", "two")
        diagnostics.warn("boundary", "three")
        assert [d.message for d in diagnostics.get_by_category("boundary")] == ["one", "three"]
        assert diagnostics.messages() == ["one", "two", "three"]

    def test_str(self):
        """Test the printable form."""
        d = Diagnostic("boundary", "warning", "net is not closed")
        assert str(d) == "[warning] boundary: net is not closed"


class TestErrors:
    """Tests for the exception types."""

    def test_net_spec_error_is_value_error(self):
        with pytest.raises(ValueError):
            raise NetSpecError("bad notation")

    def test_topology_error_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            raise TopologyError("face does not close")

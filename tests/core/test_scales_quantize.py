from __future__ import annotations

import pytest

from conflictviz.core.errors import ParameterError
from conflictviz.core.scales import QuantizeScale, log_domain, log_edges


def test_quantize_scale_buckets_and_thresholds() -> None:
    s = QuantizeScale(domain_max=90.0, buckets=3)
    assert s.thresholds == [30.0, 60.0]
    assert [s.bucket(v) for v in (0, 29.9, 30, 89, 90, 500)] == [0, 0, 1, 2, 2, 2]
    assert s.extent(1) == (30.0, 60.0)
    assert s.label(2) == "60–90"


def test_quantize_scale_degenerate_domain_maps_to_first_bucket() -> None:
    s = QuantizeScale.from_values([])
    assert s.domain_max == 0.0
    assert s.thresholds == []
    assert s.bucket(123.0) == 0
    assert s.label(0) == "0–0"


def test_quantize_scale_from_values_uses_max() -> None:
    s = QuantizeScale.from_values([5, 1000, 20], buckets=4)
    assert s.domain_max == 1000.0
    assert s.bucket(999.0) == 3
    assert s.label(0) == "0–250"


def test_quantize_scale_requires_a_bucket() -> None:
    with pytest.raises(ParameterError):
        QuantizeScale(domain_max=10.0, buckets=0)


def test_log_domain_floors_at_one() -> None:
    assert log_domain([0, 5, 250]) == (1.0, 250.0)
    assert log_domain([-3]) == (1.0, 1.0)
    assert log_domain([]) == (1.0, 1.0)


def test_log_edges_decades() -> None:
    edges = log_edges([1, 1000], 3)
    assert edges == pytest.approx([1.0, 10.0, 100.0, 1000.0])
    assert edges[0] == 1.0 and edges[-1] == 1000.0


def test_log_edges_degenerate_domain_widens_by_a_decade() -> None:
    edges = log_edges([5, 5], 2)
    assert len(edges) == 3
    assert edges[0] == 5.0
    assert edges[-1] == pytest.approx(50.0)
    assert all(b > a for a, b in zip(edges, edges[1:]))


def test_log_edges_requires_a_bin() -> None:
    with pytest.raises(ParameterError):
        log_edges([1, 2], 0)

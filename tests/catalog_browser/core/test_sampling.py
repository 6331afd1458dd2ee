from __future__ import annotations

import pytest

from catalog_browser.core.sampling import SampleConfig


@pytest.mark.parametrize(
    "ratio, seed, expected",
    [
        (0.25, 7, "0.25@7"),
        (0.25, None, "0.25"),
        ("0.5", "3", "0.5@3"),
        (1, 7, None),
        (0, None, None),
        (1.5, None, None),
        ("abc", None, None),
        (None, None, None),
    ],
)
def test_sample_query_value(ratio, seed, expected):
    assert SampleConfig.from_inputs(ratio, seed).query_value() == expected


def test_disabled_sample_drops_seed():
    sample = SampleConfig.from_inputs(1, 42)
    assert not sample.enabled
    assert sample.seed is None


def test_sample_dict_roundtrip():
    sample = SampleConfig(ratio=0.1, seed=9)
    assert SampleConfig.from_dict(sample.to_dict()) == sample
    assert SampleConfig.from_dict(None) == SampleConfig()

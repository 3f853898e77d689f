import math

import pytest

from analysis.severity import SeverityClassifier, classify_metrics, classify_value, primary_finding
from utils.data_structures import PostureMetrics
from utils.exceptions import ConfigurationError, ValidationError


class TestClassifyValue:
    @pytest.mark.parametrize("value, expected", [
        (0.0, "normal"),
        (2.0, "normal"),
        (-1.5, "normal"),
        (3.0, "moderate"),
        (-4.0, "moderate"),
        (4.1, "severe"),
        (-10.0, "severe"),
    ])
    def test_bands(self, value, expected):
        assert classify_value(value, ideal=0.0, tolerance=2.0) == expected

    def test_relative_to_ideal(self):
        assert classify_value(176.0, ideal=180.0, tolerance=3.0) == "moderate"

    @pytest.mark.parametrize("value", [math.nan, math.inf, None])
    def test_invalid_value(self, value):
        with pytest.raises(ValidationError):
            classify_value(value, ideal=0.0, tolerance=2.0)

    def test_negative_tolerance(self):
        with pytest.raises(ConfigurationError):
            classify_value(1.0, ideal=0.0, tolerance=-1.0)


class TestClassifyMetrics:
    def test_absent_metrics_are_skipped(self):
        classifications = classify_metrics(PostureMetrics(head_tilt_deg=2.5))

        assert len(classifications) == 1
        assert classifications[0].metric == "head_tilt_deg"
        assert classifications[0].status == "moderate"
        assert classifications[0].unit == "°"

    def test_empty_metrics(self):
        assert classify_metrics(PostureMetrics()) == []

    def test_shoulder_tolerance_is_normalized(self):
        classifications = classify_metrics(PostureMetrics(shoulder_height_diff=0.05))
        assert classifications[0].status == "severe"

    def test_forward_head(self):
        classifications = classify_metrics(PostureMetrics(forward_head=-3.0))
        assert classifications[0].status == "normal"

    def test_unknown_metric_in_config(self):
        config = {
            "severity": {"spine_curvature": {"label": "", "ideal": 0, "tolerance": 1, "unit": ""}},
            "finding_thresholds": [],
            "default_finding": "aligned",
        }
        with pytest.raises(ConfigurationError):
            SeverityClassifier(config)


class TestPrimaryFinding:
    def test_pelvic_obliquity_first(self):
        metrics = PostureMetrics(pelvic_tilt_deg=-4.0, head_tilt_deg=5.0)
        assert primary_finding(metrics) == "pelvic_obliquity"

    def test_cervical_tilt(self):
        metrics = PostureMetrics(pelvic_tilt_deg=1.0, head_tilt_deg=3.5)
        assert primary_finding(metrics) == "cervical_tilt"

    def test_aligned(self):
        assert primary_finding(PostureMetrics(pelvic_tilt_deg=3.0, head_tilt_deg=-2.0)) == "aligned"
        assert primary_finding(PostureMetrics()) == "aligned"

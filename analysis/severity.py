"""
指标严重程度分级

独立于姿态计算的可选展示层：按理想值与容差将指标分为 normal / moderate / severe。
"""
from typing import List, Optional
import logging

from analysis.geometry import is_finite
from config.analysis_configs import ANALYSIS_CONFIG
from utils.data_structures import MetricClassification, PostureMetrics
from utils.exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

STATUS_NORMAL = "normal"
STATUS_MODERATE = "moderate"
STATUS_SEVERE = "severe"

def classify_value(value: float, ideal: float, tolerance: float) -> str:
    """
    按与理想值的偏差分级

    Args:
        value: 指标值
        ideal: 理想值
        tolerance: 容差

    Returns:
        "normal", "moderate" 或 "severe"
    """
    if not is_finite(value):
        raise ValidationError(f"指标值无效: {value}")
    if tolerance < 0:
        raise ConfigurationError(f"容差不能为负: {tolerance}")

    diff = abs(value - ideal)
    if diff <= tolerance:
        return STATUS_NORMAL
    if diff <= tolerance * 2:
        return STATUS_MODERATE
    return STATUS_SEVERE

class SeverityClassifier:
    """
    指标分级器
    """

    def __init__(self, config: Optional[dict] = None):
        """
        初始化分级器

        Args:
            config: 分级配置，默认使用 ANALYSIS_CONFIG
        """
        config = config or ANALYSIS_CONFIG
        self.bands = config["severity"]
        self.finding_thresholds = config["finding_thresholds"]
        self.default_finding = config["default_finding"]

        unknown = set(self.bands) - set(PostureMetrics.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"分级配置包含未知指标: {', '.join(sorted(unknown))}")

    def classify_metrics(self, metrics: PostureMetrics) -> List[MetricClassification]:
        """
        对已计算的指标分级，缺省指标不参与分级

        Args:
            metrics: 姿态指标

        Returns:
            分级结果列表
        """
        classifications = []
        for metric_name, band in self.bands.items():
            value = getattr(metrics, metric_name)
            if value is None:
                continue

            status = classify_value(value, band["ideal"], band["tolerance"])
            classifications.append(MetricClassification(
                metric=metric_name,
                label=band["label"],
                value=value,
                ideal=band["ideal"],
                tolerance=band["tolerance"],
                unit=band["unit"],
                status=status
            ))

        return classifications

    def primary_finding(self, metrics: PostureMetrics) -> str:
        """
        给出主要功能障碍结论

        Returns:
            第一个超过阈值的发现，均未超过时为默认结论
        """
        for metric_name, threshold, finding in self.finding_thresholds:
            value = getattr(metrics, metric_name)
            if value is not None and abs(value) > threshold:
                return finding
        return self.default_finding

_default_classifier = SeverityClassifier()

def classify_metrics(metrics: PostureMetrics) -> List[MetricClassification]:
    return _default_classifier.classify_metrics(metrics)

def primary_finding(metrics: PostureMetrics) -> str:
    return _default_classifier.primary_finding(metrics)

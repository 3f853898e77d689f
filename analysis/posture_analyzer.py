"""
姿态评估主逻辑

根据正面、侧面、背面三个视角的命名标记点计算姿态偏差指标。
每项指标对应一条 MetricRule：所需标记点齐全且结果为有限值时才输出，否则该指标缺省。
"""
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from analysis.geometry import (
    angle_between,
    horizontal_offset_percent,
    horizontal_tilt,
    is_finite,
    shank_inclination,
    trunk_lean,
    vertical_offset,
)
from utils.data_structures import (
    BilateralMetric,
    PoseLandmarks,
    PostureInput,
    PostureMetrics,
)

@dataclass(frozen=True)
class MetricRule:
    """
    单项指标的计算规则

    Attributes:
        name: 指标名
        required: 所需位点名，按顺序传给 formula
        formula: 几何公式
    """
    name: str
    required: Tuple[str, ...]
    formula: Callable[..., float]

    def is_applicable(self, view: PoseLandmarks) -> bool:
        return all(getattr(view, site) is not None for site in self.required)

    def evaluate(self, view: PoseLandmarks) -> Optional[float]:
        """
        计算指标

        Args:
            view: 视角标记点

        Returns:
            指标值；标记点缺失或结果非有限值时为 None
        """
        if not self.is_applicable(view):
            return None

        value = self.formula(*(getattr(view, site) for site in self.required))
        if not is_finite(value):
            return None
        return float(value)

def _first_available(rules: Sequence[MetricRule], view: PoseLandmarks) -> Optional[float]:
    """按顺序尝试规则，返回第一个有效值"""
    for rule in rules:
        value = rule.evaluate(view)
        if value is not None:
            return value
    return None

def _bilateral(left: MetricRule, right: MetricRule, view: PoseLandmarks) -> Optional[BilateralMetric]:
    metric = BilateralMetric(left=left.evaluate(view), right=right.evaluate(view))
    return None if metric.is_empty() else metric

# 正面：眼睛优先，缺失时使用耳朵
HEAD_TILT_RULES = (
    MetricRule("head_tilt_deg", ("left_eye", "right_eye"), horizontal_tilt),
    MetricRule("head_tilt_deg", ("left_ear", "right_ear"), horizontal_tilt),
)
SHOULDER_HEIGHT_RULE = MetricRule(
    "shoulder_height_diff", ("left_shoulder", "right_shoulder"), vertical_offset
)
PELVIC_TILT_RULE = MetricRule("pelvic_tilt_deg", ("left_hip", "right_hip"), horizontal_tilt)
TRUNK_LEAN_RULE = MetricRule(
    "trunk_lean_deg",
    ("left_shoulder", "right_shoulder", "left_hip", "right_hip"),
    lambda ls, rs, lh, rh: trunk_lean((ls, rs), (lh, rh)),
)
# 髋-膝-踝内角，180 为完全伸直
KNEE_VALGUS_LEFT_RULE = MetricRule(
    "knee_valgus.left", ("left_hip", "left_knee", "left_ankle"), angle_between
)
KNEE_VALGUS_RIGHT_RULE = MetricRule(
    "knee_valgus.right", ("right_hip", "right_knee", "right_ankle"), angle_between
)

# 侧面：假设受试者在照片中面朝画面左侧，耳 x 减肩 x 的符号依赖该朝向，未做归一化
FORWARD_HEAD_RULE = MetricRule(
    "forward_head", ("left_ear", "left_shoulder"), horizontal_offset_percent
)

# 背面：左右两侧使用同一公式
ANKLE_PRONATION_LEFT_RULE = MetricRule(
    "ankle_pronation_estimate.left", ("left_knee", "left_ankle"), shank_inclination
)
ANKLE_PRONATION_RIGHT_RULE = MetricRule(
    "ankle_pronation_estimate.right", ("right_knee", "right_ankle"), shank_inclination
)

def _analyze_front(view: PoseLandmarks) -> dict:
    return {
        "head_tilt_deg": _first_available(HEAD_TILT_RULES, view),
        "shoulder_height_diff": SHOULDER_HEIGHT_RULE.evaluate(view),
        "pelvic_tilt_deg": PELVIC_TILT_RULE.evaluate(view),
        "trunk_lean_deg": TRUNK_LEAN_RULE.evaluate(view),
        "knee_valgus": _bilateral(KNEE_VALGUS_LEFT_RULE, KNEE_VALGUS_RIGHT_RULE, view),
    }

def _analyze_side(view: PoseLandmarks) -> dict:
    return {
        "forward_head": FORWARD_HEAD_RULE.evaluate(view),
    }

def _analyze_back(view: PoseLandmarks) -> dict:
    return {
        "ankle_pronation_estimate": _bilateral(
            ANKLE_PRONATION_LEFT_RULE, ANKLE_PRONATION_RIGHT_RULE, view
        ),
    }

def analyze_posture(posture_input: PostureInput) -> PostureMetrics:
    """
    计算姿态指标

    各视角独立计算，不存在跨视角指标。缺失标记点不会抛出异常，对应指标缺省即可。

    Args:
        posture_input: 三视角标记点

    Returns:
        合并后的姿态指标
    """
    values = {}
    if posture_input.front is not None:
        values.update(_analyze_front(posture_input.front))
    if posture_input.side is not None:
        values.update(_analyze_side(posture_input.side))
    if posture_input.back is not None:
        values.update(_analyze_back(posture_input.back))

    return PostureMetrics(**{k: v for k, v in values.items() if v is not None})

"""
数据结构定义
"""
from typing import Dict, Any, Optional, Tuple
from dataclasses import dataclass, asdict, fields

from utils.exceptions import InputError

# 固定的解剖位点词表
LANDMARK_SITES: Tuple[str, ...] = (
    "nose", "left_eye", "right_eye", "left_ear", "right_ear",
    "left_shoulder", "right_shoulder", "left_elbow", "right_elbow",
    "left_wrist", "right_wrist", "left_hip", "right_hip",
    "left_knee", "right_knee", "left_ankle", "right_ankle",
    "left_heel", "right_heel", "c7", "l5",
)

VIEW_NAMES: Tuple[str, ...] = ("front", "side", "back")

@dataclass(frozen=True)
class Landmark:
    """
    单个解剖标记点

    x, y 为归一化坐标（图像宽/高的比例），z 与 visibility 为可选字段，
    当前公式均不使用。
    """
    x: float
    y: float
    z: Optional[float] = None
    visibility: Optional[float] = None

@dataclass(frozen=True)
class PoseLandmarks:
    """单个视角下的命名标记点，每个位点独立可缺省"""
    nose: Optional[Landmark] = None
    left_eye: Optional[Landmark] = None
    right_eye: Optional[Landmark] = None
    left_ear: Optional[Landmark] = None
    right_ear: Optional[Landmark] = None
    left_shoulder: Optional[Landmark] = None
    right_shoulder: Optional[Landmark] = None
    left_elbow: Optional[Landmark] = None
    right_elbow: Optional[Landmark] = None
    left_wrist: Optional[Landmark] = None
    right_wrist: Optional[Landmark] = None
    left_hip: Optional[Landmark] = None
    right_hip: Optional[Landmark] = None
    left_knee: Optional[Landmark] = None
    right_knee: Optional[Landmark] = None
    left_ankle: Optional[Landmark] = None
    right_ankle: Optional[Landmark] = None
    left_heel: Optional[Landmark] = None
    right_heel: Optional[Landmark] = None
    c7: Optional[Landmark] = None
    l5: Optional[Landmark] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PoseLandmarks":
        """
        从位点名映射构建视角数据

        Args:
            data: {位点名: Landmark 或 {x, y, z?, visibility?}}

        Returns:
            PoseLandmarks
        """
        unknown = set(data) - set(LANDMARK_SITES)
        if unknown:
            raise InputError(f"未知的标记位点: {', '.join(sorted(unknown))}")

        points = {}
        for site, value in data.items():
            if value is None:
                continue
            if isinstance(value, Landmark):
                points[site] = value
            else:
                try:
                    points[site] = Landmark(**value)
                except TypeError as e:
                    raise InputError(f"位点 {site} 数据格式错误: {str(e)}")
        return cls(**points)

    def present_sites(self) -> Tuple[str, ...]:
        """返回已标记的位点名"""
        return tuple(f.name for f in fields(self) if getattr(self, f.name) is not None)

@dataclass(frozen=True)
class PostureInput:
    """一次姿态评估的输入，正面/侧面/背面三个视角均可缺省"""
    front: Optional[PoseLandmarks] = None
    side: Optional[PoseLandmarks] = None
    back: Optional[PoseLandmarks] = None

    def present_views(self) -> Tuple[str, ...]:
        return tuple(name for name in VIEW_NAMES if getattr(self, name) is not None)

@dataclass(frozen=True)
class BilateralMetric:
    """左右两侧独立的指标"""
    left: Optional[float] = None
    right: Optional[float] = None

    def is_empty(self) -> bool:
        return self.left is None and self.right is None

@dataclass(frozen=True)
class PostureMetrics:
    """
    姿态评估指标

    None 表示所需标记点缺失或几何退化，调用方应视为"无法评估"，而非 0。
    """
    head_tilt_deg: Optional[float] = None
    shoulder_height_diff: Optional[float] = None
    pelvic_tilt_deg: Optional[float] = None
    trunk_lean_deg: Optional[float] = None
    knee_valgus: Optional[BilateralMetric] = None
    forward_head: Optional[float] = None
    ankle_pronation_estimate: Optional[BilateralMetric] = None

    def to_dict(self) -> Dict[str, Any]:
        """仅输出已计算的指标"""
        result = {}
        for key, value in asdict(self).items():
            if value is None:
                continue
            if isinstance(value, dict):
                value = {side: v for side, v in value.items() if v is not None}
            result[key] = value
        return result

    def is_empty(self) -> bool:
        return not self.to_dict()

@dataclass(frozen=True)
class MetricClassification:
    """单项指标的严重程度分级（展示层使用）"""
    metric: str
    label: str
    value: float
    ideal: float
    tolerance: float
    unit: str
    status: str  # "normal", "moderate", "severe"

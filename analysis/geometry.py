"""
姿态几何计算模块

所有角度单位为度。图像坐标系中 y 轴向下增长。
几何退化（重合点）或坐标非有限值时返回 NaN，不抛出异常，也不会被当作 0。
"""
import math
from typing import Tuple

import numpy as np

from utils.data_structures import Landmark

def is_finite(value) -> bool:
    """判断数值是否为有限浮点数"""
    return value is not None and bool(np.isfinite(value))

def _is_degenerate(dx: float, dy: float) -> bool:
    """向量长度为零，或由非有限坐标（inf/NaN）得到，方向无定义"""
    if not (is_finite(dx) and is_finite(dy)):
        return True
    return dx == 0 and dy == 0

def midpoint(a: Landmark, b: Landmark) -> Landmark:
    """两点中点"""
    return Landmark(x=(a.x + b.x) / 2, y=(a.y + b.y) / 2)

def angle_between(a: Landmark, b: Landmark, c: Landmark) -> float:
    """
    计算三点形成的夹角（b 为顶点）

    Args:
        a: 第一个点
        b: 顶点
        c: 第三个点

    Returns:
        角度，范围 [0, 180]；b 与 a 或 c 重合时为 NaN
    """
    if _is_degenerate(a.x - b.x, a.y - b.y) or _is_degenerate(c.x - b.x, c.y - b.y):
        return math.nan

    radians = np.arctan2(c.y - b.y, c.x - b.x) - np.arctan2(a.y - b.y, a.x - b.x)
    angle = abs(float(np.degrees(radians)))
    if angle > 180.0:
        angle = 360.0 - angle
    return angle

def horizontal_tilt(left: Landmark, right: Landmark) -> float:
    """
    计算左右两点连线相对水平线的倾斜角

    右侧点低于左侧点（y 更大）时为正。两点重合时为 NaN。
    """
    dx = right.x - left.x
    dy = right.y - left.y
    if _is_degenerate(dx, dy):
        return math.nan
    return float(np.degrees(np.arctan2(dy, dx)))

def trunk_lean(
    shoulders: Tuple[Landmark, Landmark],
    hips: Tuple[Landmark, Landmark]
) -> float:
    """
    计算躯干相对铅垂线的侧倾角

    Args:
        shoulders: (左肩, 右肩)
        hips: (左髋, 右髋)

    Returns:
        髋中点指向肩中点的向量与竖直向上方向的有符号夹角
    """
    shoulder_center = midpoint(*shoulders)
    hip_center = midpoint(*hips)

    dx = shoulder_center.x - hip_center.x
    dy = shoulder_center.y - hip_center.y
    if _is_degenerate(dx, dy):
        return math.nan

    # -dy 使竖直向上为正方向
    return float(np.degrees(np.arctan2(dx, -dy)))

def vertical_offset(a: Landmark, b: Landmark) -> float:
    """两点归一化纵坐标差的绝对值"""
    return abs(a.y - b.y)

def horizontal_offset_percent(a: Landmark, b: Landmark) -> float:
    """a 相对 b 的横向偏移，按图像宽度百分比计"""
    return (a.x - b.x) * 100

def shank_inclination(knee: Landmark, ankle: Landmark) -> float:
    """
    计算小腿（膝→踝）相对竖直方向的倾斜角

    膝踝重合时为 NaN。
    """
    dx = ankle.x - knee.x
    dy = ankle.y - knee.y
    if _is_degenerate(dx, dy):
        return math.nan
    return float(np.degrees(np.arctan2(dx, dy)))

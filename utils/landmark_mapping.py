"""
关键点映射工具

将姿态检测模型输出的原始关键点序列（MediaPipe 33点 / COCO 17点）映射为命名标记点。
"""
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple
import logging

from config.analysis_configs import KEYPOINT_FORMATS
from utils.data_structures import Landmark, PoseLandmarks, PostureInput, VIEW_NAMES
from utils.exceptions import InputError

logger = logging.getLogger(__name__)

_VISIBILITY_KEYS = ("visibility", "confidence", "score")

def _to_landmark(keypoint: Any) -> Landmark:
    """
    解析单个关键点

    支持 Landmark、{x, y, z?, visibility?/confidence?/score?}、
    [x, y]、[x, y, score]、[x, y, z, score]
    """
    if isinstance(keypoint, Landmark):
        return keypoint
    if isinstance(keypoint, (str, bytes)):
        raise InputError(f"关键点格式错误: {keypoint!r}")

    try:
        if isinstance(keypoint, Mapping):
            visibility = next(
                (keypoint[k] for k in _VISIBILITY_KEYS if keypoint.get(k) is not None), None
            )
            z = keypoint.get("z")
            return Landmark(
                x=float(keypoint["x"]),
                y=float(keypoint["y"]),
                z=None if z is None else float(z),
                visibility=None if visibility is None else float(visibility)
            )

        values = [float(v) for v in keypoint]
    except (KeyError, TypeError, ValueError) as e:
        raise InputError(f"关键点格式错误: {keypoint!r} ({str(e)})")

    if len(values) == 2:
        return Landmark(x=values[0], y=values[1])
    if len(values) == 3:
        return Landmark(x=values[0], y=values[1], visibility=values[2])
    if len(values) == 4:
        return Landmark(x=values[0], y=values[1], z=values[2], visibility=values[3])
    raise InputError(f"关键点长度错误: {len(values)}")

def map_keypoints(
    keypoints: Sequence[Any],
    keypoint_format: str = "mediapipe",
    image_size: Optional[Tuple[float, float]] = None,
    min_visibility: Optional[float] = None
) -> PoseLandmarks:
    """
    将原始关键点序列映射为命名标记点

    Args:
        keypoints: 按模型固定顺序排列的关键点
        keypoint_format: "mediapipe" 或 "coco"
        image_size: (宽, 高)，提供时将像素坐标归一化
        min_visibility: 可见度低于该值的点视为缺失，None 表示全部保留

    Returns:
        PoseLandmarks
    """
    if keypoint_format not in KEYPOINT_FORMATS:
        raise InputError(
            f"不支持的关键点格式: {keypoint_format}。支持的格式: {', '.join(KEYPOINT_FORMATS)}"
        )

    format_config = KEYPOINT_FORMATS[keypoint_format]
    if len(keypoints) < format_config["keypoint_num"]:
        raise InputError(
            f"{keypoint_format} 格式需要 {format_config['keypoint_num']} 个关键点，实际 {len(keypoints)} 个"
        )

    if image_size is not None:
        width, height = image_size
        if width <= 0 or height <= 0:
            raise InputError(f"图像尺寸无效: {image_size}")

    points = {}
    for site, idx in format_config["indices"].items():
        if keypoints[idx] is None:
            continue

        landmark = _to_landmark(keypoints[idx])

        if (min_visibility is not None and landmark.visibility is not None
                and landmark.visibility < min_visibility):
            continue

        if image_size is not None:
            landmark = Landmark(
                x=landmark.x / width,
                y=landmark.y / height,
                z=landmark.z,
                visibility=landmark.visibility
            )

        points[site] = landmark

    return PoseLandmarks(**points)

def map_views(
    raw_views: Dict[str, Optional[Sequence[Any]]],
    keypoint_format: str = "mediapipe",
    image_size: Optional[Tuple[float, float]] = None,
    min_visibility: Optional[float] = None
) -> PostureInput:
    """
    映射多视角原始关键点

    Args:
        raw_views: {"front"/"side"/"back": 关键点序列}

    Returns:
        PostureInput
    """
    unknown = set(raw_views) - set(VIEW_NAMES)
    if unknown:
        raise InputError(f"未知的视角: {', '.join(sorted(unknown))}")

    views = {}
    for view_name, keypoints in raw_views.items():
        if keypoints is None:
            continue
        views[view_name] = map_keypoints(keypoints, keypoint_format, image_size, min_visibility)
        logger.debug(f"{view_name} 视角映射 {len(views[view_name].present_sites())} 个位点")

    return PostureInput(**views)

"""
API数据模型定义
"""
from typing import List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime

class CamelModel(BaseModel):
    """字段以 camelCase 传输"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# 基础响应模型
class BaseResponse(CamelModel):
    success: bool
    message: str
    timestamp: datetime = Field(default_factory=datetime.now)

# 标记点数据模型
class LandmarkSchema(CamelModel):
    model_config = ConfigDict(extra="forbid")

    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    z: Optional[float] = Field(default=None, allow_inf_nan=False)
    visibility: Optional[float] = Field(default=None, allow_inf_nan=False)

# 单视角标记点
class PoseLandmarksSchema(CamelModel):
    model_config = ConfigDict(extra="forbid")

    nose: Optional[LandmarkSchema] = None
    left_eye: Optional[LandmarkSchema] = None
    right_eye: Optional[LandmarkSchema] = None
    left_ear: Optional[LandmarkSchema] = None
    right_ear: Optional[LandmarkSchema] = None
    left_shoulder: Optional[LandmarkSchema] = None
    right_shoulder: Optional[LandmarkSchema] = None
    left_elbow: Optional[LandmarkSchema] = None
    right_elbow: Optional[LandmarkSchema] = None
    left_wrist: Optional[LandmarkSchema] = None
    right_wrist: Optional[LandmarkSchema] = None
    left_hip: Optional[LandmarkSchema] = None
    right_hip: Optional[LandmarkSchema] = None
    left_knee: Optional[LandmarkSchema] = None
    right_knee: Optional[LandmarkSchema] = None
    left_ankle: Optional[LandmarkSchema] = None
    right_ankle: Optional[LandmarkSchema] = None
    left_heel: Optional[LandmarkSchema] = None
    right_heel: Optional[LandmarkSchema] = None
    c7: Optional[LandmarkSchema] = None
    l5: Optional[LandmarkSchema] = None

# 三视角标记点
class PostureViewsSchema(CamelModel):
    front: Optional[PoseLandmarksSchema] = None
    side: Optional[PoseLandmarksSchema] = None
    back: Optional[PoseLandmarksSchema] = None

# 姿态评估请求
class PostureAnalysisRequest(PostureViewsSchema):
    include_classification: Optional[bool] = None

# 原始关键点
class RawKeypointSchema(CamelModel):
    model_config = ConfigDict(extra="forbid")

    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    z: Optional[float] = Field(default=None, allow_inf_nan=False)
    visibility: Optional[float] = Field(
        default=None,
        allow_inf_nan=False,
        validation_alias=AliasChoices("visibility", "confidence", "score")
    )

# 原始关键点评估请求
class RawPostureAnalysisRequest(CamelModel):
    keypoint_format: Optional[str] = None  # "mediapipe", "coco"
    image_width: Optional[float] = Field(default=None, gt=0)
    image_height: Optional[float] = Field(default=None, gt=0)
    front: Optional[List[Optional[RawKeypointSchema]]] = None
    side: Optional[List[Optional[RawKeypointSchema]]] = None
    back: Optional[List[Optional[RawKeypointSchema]]] = None
    include_classification: Optional[bool] = None

# 双侧指标
class BilateralMetricSchema(CamelModel):
    left: Optional[float] = None
    right: Optional[float] = None

# 姿态指标
class PostureMetricsSchema(CamelModel):
    head_tilt_deg: Optional[float] = None
    shoulder_height_diff: Optional[float] = None
    pelvic_tilt_deg: Optional[float] = None
    trunk_lean_deg: Optional[float] = None
    knee_valgus: Optional[BilateralMetricSchema] = None
    forward_head: Optional[float] = None
    ankle_pronation_estimate: Optional[BilateralMetricSchema] = None

# 指标分级
class MetricClassificationSchema(CamelModel):
    metric: str
    label: str
    value: float
    ideal: float
    tolerance: float
    unit: str
    status: str  # "normal", "moderate", "severe"

# 姿态评估响应
class PostureAnalysisResponse(BaseResponse):
    metrics: PostureMetricsSchema
    classifications: Optional[List[MetricClassificationSchema]] = None
    primary_finding: Optional[str] = None
    views: List[str] = []
    processing_time: float

# 批量评估请求
class BatchPostureAnalysisRequest(CamelModel):
    items: List[PostureViewsSchema]
    include_classification: Optional[bool] = None

# 批量评估响应
class BatchPostureAnalysisResponse(BaseResponse):
    results: List[PostureAnalysisResponse]
    total_items: int

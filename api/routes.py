"""
API路由定义
"""
from dataclasses import asdict
from typing import Any, Dict
import logging

from fastapi import APIRouter, HTTPException

from api.schemas import (
    PostureViewsSchema, PostureAnalysisRequest, RawPostureAnalysisRequest, PostureAnalysisResponse,
    BatchPostureAnalysisRequest, BatchPostureAnalysisResponse
)
from core.pipeline import PosturePipeline
from utils.data_structures import PoseLandmarks, PostureInput, VIEW_NAMES
from utils.exceptions import InputError, ProcessingError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

# 全局处理管道实例（无状态，可并发共享）
pipeline = PosturePipeline()

def to_posture_input(request: PostureViewsSchema) -> PostureInput:
    """
    将请求模型转换为评估输入
    """
    views = {}
    for view_name in VIEW_NAMES:
        view = getattr(request, view_name)
        if view is not None:
            views[view_name] = PoseLandmarks.from_dict(view.model_dump(exclude_none=True))
    return PostureInput(**views)

def build_response(result: Dict[str, Any], message: str = "姿态评估完成") -> PostureAnalysisResponse:
    """
    将管道结果转换为响应模型
    """
    classifications = result["classifications"]
    return PostureAnalysisResponse(
        success=True,
        message=message,
        metrics=result["metrics"].to_dict(),
        classifications=None if classifications is None else [asdict(c) for c in classifications],
        primary_finding=result["primary_finding"],
        views=result["views"],
        processing_time=result["processing_time"]
    )

@router.post(
    "/posture/analyze",
    response_model=PostureAnalysisResponse,
    response_model_exclude_none=True
)
async def analyze_posture_landmarks(request: PostureAnalysisRequest):
    """
    命名标记点姿态评估接口
    """
    try:
        result = pipeline.analyze(
            to_posture_input(request),
            include_classification=request.include_classification
        )
        return build_response(result)

    except (InputError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProcessingError as e:
        raise HTTPException(status_code=500, detail=f"处理失败: {str(e)}")

@router.post(
    "/posture/analyze/raw",
    response_model=PostureAnalysisResponse,
    response_model_exclude_none=True
)
async def analyze_posture_keypoints(request: RawPostureAnalysisRequest):
    """
    原始关键点姿态评估接口（MediaPipe 33点 / COCO 17点）
    """
    image_size = None
    if request.image_width is not None or request.image_height is not None:
        if request.image_width is None or request.image_height is None:
            raise HTTPException(status_code=400, detail="imageWidth 与 imageHeight 必须同时提供")
        image_size = (request.image_width, request.image_height)

    raw_views = {}
    for view_name in VIEW_NAMES:
        keypoints = getattr(request, view_name)
        if keypoints is not None:
            raw_views[view_name] = [
                None if kpt is None else kpt.model_dump(exclude_none=True) for kpt in keypoints
            ]

    try:
        result = pipeline.analyze_raw(
            raw_views,
            keypoint_format=request.keypoint_format,
            image_size=image_size,
            include_classification=request.include_classification
        )
        return build_response(result)

    except (InputError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProcessingError as e:
        raise HTTPException(status_code=500, detail=f"处理失败: {str(e)}")

@router.post(
    "/posture/analyze/batch",
    response_model=BatchPostureAnalysisResponse,
    response_model_exclude_none=True
)
async def batch_analyze_posture(request: BatchPostureAnalysisRequest):
    """
    批量评估接口
    """
    try:
        results = pipeline.analyze_batch(
            [to_posture_input(item) for item in request.items],
            include_classification=request.include_classification
        )
        responses = [build_response(result) for result in results]

        logger.info(f"批量评估完成，共 {len(responses)} 组")

        return BatchPostureAnalysisResponse(
            success=True,
            message="批量评估完成",
            results=responses,
            total_items=len(responses)
        )

    except (InputError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProcessingError as e:
        raise HTTPException(status_code=500, detail=f"批量处理失败: {str(e)}")

"""
姿态评估处理管道
负责协调处理流程：关键点映射 -> 指标计算 -> 严重程度分级
"""
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging

from analysis.posture_analyzer import analyze_posture
from analysis.severity import SeverityClassifier
from config.settings import settings
from utils.data_structures import PostureInput
from utils.exceptions import InputError, ProcessingError, ValidationError
from utils.landmark_mapping import map_views

logger = logging.getLogger(__name__)

class PosturePipeline:
    """
    姿态评估管道类
    """

    def __init__(self, classifier: Optional[SeverityClassifier] = None):
        """
        初始化处理管道

        Args:
            classifier: 指标分级器，默认使用内置分级配置
        """
        self.classifier = classifier or SeverityClassifier()

        logger.info("姿态评估管道初始化完成")

    def analyze(
        self,
        posture_input: PostureInput,
        include_classification: Optional[bool] = None
    ) -> Dict[str, Any]:
        """
        执行单次姿态评估

        Args:
            posture_input: 三视角标记点
            include_classification: 是否附带严重程度分级，None 时使用全局配置

        Returns:
            {"metrics", "classifications", "primary_finding", "views", "processing_time"}
        """
        if include_classification is None:
            include_classification = settings.INCLUDE_CLASSIFICATION

        start_time = time.time()
        views = list(posture_input.present_views())

        try:
            metrics = analyze_posture(posture_input)

            classifications = None
            finding = None
            if include_classification:
                classifications = self.classifier.classify_metrics(metrics)
                finding = self.classifier.primary_finding(metrics)

        except (InputError, ValidationError):
            raise
        except Exception as e:
            logger.error(f"姿态评估失败: {str(e)}")
            raise ProcessingError(f"姿态评估失败: {str(e)}")

        processing_time = time.time() - start_time
        metric_values = metrics.to_dict()
        logger.info(
            f"姿态评估完成，视角: {views or '无'}，"
            f"输出指标 {len(metric_values)} 项，耗时 {processing_time * 1000:.2f}ms"
        )
        logger.debug(f"姿态指标: {metric_values}")

        return {
            "metrics": metrics,
            "classifications": classifications,
            "primary_finding": finding,
            "views": views,
            "processing_time": processing_time
        }

    def analyze_raw(
        self,
        raw_views: Dict[str, Optional[Sequence[Any]]],
        keypoint_format: Optional[str] = None,
        image_size: Optional[Tuple[float, float]] = None,
        include_classification: Optional[bool] = None
    ) -> Dict[str, Any]:
        """
        从检测模型原始关键点执行评估

        Args:
            raw_views: {"front"/"side"/"back": 关键点序列}
            keypoint_format: 关键点格式，None 时使用全局配置
            image_size: (宽, 高)，像素坐标时提供
            include_classification: 是否附带严重程度分级

        Returns:
            与 analyze 相同
        """
        keypoint_format = keypoint_format or settings.DEFAULT_KEYPOINT_FORMAT
        logger.info(f"开始映射原始关键点，格式: {keypoint_format}")

        posture_input = map_views(
            raw_views,
            keypoint_format=keypoint_format,
            image_size=image_size,
            min_visibility=settings.MIN_KEYPOINT_VISIBILITY
        )
        return self.analyze(posture_input, include_classification)

    def analyze_batch(
        self,
        inputs: List[PostureInput],
        include_classification: Optional[bool] = None
    ) -> List[Dict[str, Any]]:
        """
        批量评估

        Args:
            inputs: 评估输入列表

        Returns:
            评估结果列表，顺序与输入一致
        """
        logger.info(f"开始批量评估，共 {len(inputs)} 组")
        return [self.analyze(posture_input, include_classification) for posture_input in inputs]

"""
分析相关配置
"""

# 原始关键点索引 -> 位点名
# MediaPipe Pose 33个关键点
MEDIAPIPE_KEYPOINT_INDICES = {
    "nose": 0, "left_eye": 2, "right_eye": 5, "left_ear": 7, "right_ear": 8,
    "left_shoulder": 11, "right_shoulder": 12, "left_elbow": 13, "right_elbow": 14,
    "left_wrist": 15, "right_wrist": 16, "left_hip": 23, "right_hip": 24,
    "left_knee": 25, "right_knee": 26, "left_ankle": 27, "right_ankle": 28,
    "left_heel": 29, "right_heel": 30
}

# COCO 17个关键点（无脚跟）
COCO_KEYPOINT_INDICES = {
    "nose": 0, "left_eye": 1, "right_eye": 2, "left_ear": 3, "right_ear": 4,
    "left_shoulder": 5, "right_shoulder": 6, "left_elbow": 7, "right_elbow": 8,
    "left_wrist": 9, "right_wrist": 10, "left_hip": 11, "right_hip": 12,
    "left_knee": 13, "right_knee": 14, "left_ankle": 15, "right_ankle": 16
}

KEYPOINT_FORMATS = {
    "mediapipe": {
        "keypoint_num": 33,
        "indices": MEDIAPIPE_KEYPOINT_INDICES,
    },
    "coco": {
        "keypoint_num": 17,
        "indices": COCO_KEYPOINT_INDICES,
    },
}

# 严重程度分级：|值 - 理想值| <= 容差 为 normal，<= 2倍容差 为 moderate，否则 severe
SEVERITY_CONFIG = {
    "head_tilt_deg": {"label": "头部对齐", "ideal": 0.0, "tolerance": 2.0, "unit": "°"},
    "shoulder_height_diff": {"label": "肩部水平差", "ideal": 0.0, "tolerance": 0.02, "unit": ""},
    "pelvic_tilt_deg": {"label": "骨盆水平", "ideal": 0.0, "tolerance": 1.5, "unit": "°"},
    "trunk_lean_deg": {"label": "躯干侧倾", "ideal": 0.0, "tolerance": 2.0, "unit": "°"},
    "forward_head": {"label": "头前伸", "ideal": 0.0, "tolerance": 5.0, "unit": "%"},
}

# 主要发现判定阈值（度），按顺序判定
FINDING_THRESHOLDS = [
    ("pelvic_tilt_deg", 3.0, "pelvic_obliquity"),
    ("head_tilt_deg", 3.0, "cervical_tilt"),
]
DEFAULT_FINDING = "aligned"

ANALYSIS_CONFIG = {
    "keypoint_formats": KEYPOINT_FORMATS,
    "severity": SEVERITY_CONFIG,
    "finding_thresholds": FINDING_THRESHOLDS,
    "default_finding": DEFAULT_FINDING,
}

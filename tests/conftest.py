import os

import pytest

# 测试时不写日志文件
os.environ.setdefault("LOG_FILE", "")

from utils.data_structures import Landmark, PoseLandmarks, PostureInput


def lm(x, y, **kwargs):
    return Landmark(x=x, y=y, **kwargs)


@pytest.fixture
def level_front_view():
    """左右对称、水平的正面体态"""
    return PoseLandmarks(
        left_eye=lm(0.45, 0.30),
        right_eye=lm(0.55, 0.30),
        left_shoulder=lm(0.40, 0.45),
        right_shoulder=lm(0.60, 0.45),
        left_hip=lm(0.42, 0.65),
        right_hip=lm(0.58, 0.65),
    )


@pytest.fixture
def full_front_view():
    """含双腿的非对称正面体态"""
    return PoseLandmarks(
        nose=lm(0.50, 0.25),
        left_eye=lm(0.46, 0.22),
        right_eye=lm(0.54, 0.23),
        left_ear=lm(0.42, 0.23),
        right_ear=lm(0.58, 0.25),
        left_shoulder=lm(0.38, 0.40),
        right_shoulder=lm(0.62, 0.42),
        left_hip=lm(0.42, 0.62),
        right_hip=lm(0.58, 0.63),
        left_knee=lm(0.44, 0.78),
        right_knee=lm(0.55, 0.79),
        left_ankle=lm(0.43, 0.95),
        right_ankle=lm(0.57, 0.95),
    )


@pytest.fixture
def full_posture_input(full_front_view):
    return PostureInput(
        front=full_front_view,
        side=PoseLandmarks(left_ear=lm(0.47, 0.20), left_shoulder=lm(0.50, 0.38)),
        back=PoseLandmarks(
            left_knee=lm(0.42, 0.70),
            left_ankle=lm(0.43, 0.95),
            right_knee=lm(0.58, 0.70),
            right_ankle=lm(0.56, 0.95),
        ),
    )

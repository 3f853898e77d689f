"""
全局配置管理
"""
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings

# 项目根目录
BASE_DIR = Path(__file__).parent.parent

class Settings(BaseSettings):
    # 服务器配置
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = True
    CORS_ORIGINS: List[str] = ["*"]

    # 日志配置
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = str(BASE_DIR / "posture_analysis.log")

    # 分析配置
    INCLUDE_CLASSIFICATION: bool = True
    DEFAULT_KEYPOINT_FORMAT: str = "mediapipe"
    MIN_KEYPOINT_VISIBILITY: Optional[float] = None

    class Config:
        env_file = ".env"

settings = Settings()

"""
主应用入口 - 体态评估系统
使用FastAPI提供基于人体标记点的姿态偏差计算
"""

import sys
import math
import logging
from datetime import datetime

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router
from config.settings import settings

# 配置日志
handlers = [logging.StreamHandler(sys.stdout)]
if settings.LOG_FILE:
    handlers.append(logging.FileHandler(settings.LOG_FILE, encoding='utf-8'))

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=handlers
)
logger = logging.getLogger(__name__)

# 创建FastAPI应用
app = FastAPI(
    title="体态评估系统",
    description="基于正面/侧面/背面人体标记点的体态生物力学分析API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# 添加CORS中间件
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")

def _json_safe(value):
    """将非有限浮点数转换为字符串，保证错误详情可序列化为JSON"""
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_json_safe(item) for item in value]
    return value

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """请求校验失败 - 返回422，NaN/Infinity 输入以字符串形式回显"""
    logger.warning(f"请求校验失败: {request.url.path}")
    return JSONResponse(
        status_code=422,
        content={"detail": _json_safe(jsonable_encoder(exc.errors()))}
    )

@app.on_event("startup")
async def startup_event():
    """应用启动事件"""
    logger.info("🚀 启动体态评估系统...")
    logger.info(f"📍 API文档: http://{settings.HOST}:{settings.PORT}/docs")
    logger.info(f"⚙️ 关键点格式: {settings.DEFAULT_KEYPOINT_FORMAT}，严重程度分级: {settings.INCLUDE_CLASSIFICATION}")
    logger.info("✅ 系统启动完成")

@app.on_event("shutdown")
async def shutdown_event():
    """应用关闭事件"""
    logger.info("✅ 系统关闭完成")

@app.get("/")
async def root():
    """根路径 - 系统信息"""
    return {
        "system": "体态评估系统",
        "version": "1.0.0",
        "status": "运行中",
        "timestamp": datetime.now().isoformat(),
        "docs": "/docs",
        "endpoints": {
            "analyze": "/api/posture/analyze",
            "analyze_raw": "/api/posture/analyze/raw",
            "analyze_batch": "/api/posture/analyze/batch"
        }
    }

@app.get("/health")
async def health_check():
    """健康检查"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat()
    }

if __name__ == "__main__":
    print("🚀 启动体态评估系统...")
    print(f"📍 API地址: http://{settings.HOST}:{settings.PORT}")
    print(f"📖 API文档: http://{settings.HOST}:{settings.PORT}/docs")

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )

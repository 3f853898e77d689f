"""
自定义异常类
"""

class BaseAnalysisError(Exception):
    """姿态评估系统基础异常"""
    pass

class InputError(BaseAnalysisError):
    """输入关键点异常"""
    pass

class ProcessingError(BaseAnalysisError):
    """处理流程异常"""
    pass

class ValidationError(BaseAnalysisError):
    """指标校验异常"""
    pass

class ConfigurationError(BaseAnalysisError):
    """配置异常"""
    pass

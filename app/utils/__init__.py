"""工具模块.

包含各种实用工具和辅助函数,提供通用的功能支持.

主要工具:
- request_payload: 表单字段提取
- time_utils: 时间处理工具
- response_utils: 统一错误响应
- structlog_config: 结构化日志配置
"""

"""Pydantic schemas.

集中维护写路径的 payload schema, 用于:
- 类型转换与默认值
- 业务字段校验(输出面向用户的错误文案)
- 兼容表单字段 alias
"""

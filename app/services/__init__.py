"""服务层模块.

主要模块:
- cache_service: 看板视图缓存
- invoices: 发票写操作与列表读取
"""

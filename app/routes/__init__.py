"""路由模块.

定义所有 HTTP 路由端点,处理客户端请求并返回响应.

主要路由:
- main: 首页跳转
- invoices: 发票列表与创建/编辑/删除表单
- health: 存活与数据库健康检查
"""

# 该文件仅作为包标识,避免在导入阶段引入循环依赖.

"""看板视图路径常量.

缓存失效与跳转都以逻辑路径为键,与蓝图挂载前缀保持一致.
"""


class DashboardPaths:
    """看板视图路径常量."""

    INVOICES = "/dashboard/invoices"

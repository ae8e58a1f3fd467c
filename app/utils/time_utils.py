"""统一时间处理工具模块.

所有落库时间一律基于 UTC,展示层再按需格式化.
"""

from datetime import UTC, date, datetime


class TimeFormats:
    """时间格式常量."""

    DATE_FORMAT = "%Y-%m-%d"


class TimeUtils:
    """统一时间处理工具类."""

    @staticmethod
    def now() -> datetime:
        """获取当前 UTC 时间.

        Returns:
            带 UTC 时区信息的当前时间.

        """
        return datetime.now(UTC)

    @staticmethod
    def today() -> date:
        """获取当前 UTC 日历日期.

        发票的开票日期取 UTC 当天,与服务器本地时区无关.

        Returns:
            UTC 当天的 date 对象.

        """
        return TimeUtils.now().date()

    @staticmethod
    def format_date(value: date | datetime | None, fmt: str = TimeFormats.DATE_FORMAT) -> str:
        """格式化日期,空值返回空字符串."""
        if value is None:
            return ""
        return value.strftime(fmt)


time_utils = TimeUtils()

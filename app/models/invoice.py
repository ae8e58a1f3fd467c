"""发票看板 - 发票模型."""

from sqlalchemy import String
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

from app import db
from app.constants import InvoiceStatus


class generate_invoice_id(FunctionElement):  # noqa: N801
    """数据库端生成 UUID 文本的默认值表达式."""

    type = String(36)
    inherit_cache = True


@compiles(generate_invoice_id, "postgresql")
def _compile_generate_invoice_id_postgresql(_element, _compiler, **_kw) -> str:
    return "gen_random_uuid()::text"


@compiles(generate_invoice_id, "sqlite")
def _compile_generate_invoice_id_sqlite(_element, _compiler, **_kw) -> str:
    # 拼出 8-4-4-4-12 的 v4 UUID 文本
    return (
        "(lower(hex(randomblob(4))) || '-' || lower(hex(randomblob(2))) || '-4' || "
        "substr(lower(hex(randomblob(2))), 2) || '-' || "
        "substr('89ab', 1 + (random() & 3), 1) || substr(lower(hex(randomblob(2))), 2) || '-' || "
        "lower(hex(randomblob(6))))"
    )


class Invoice(db.Model):
    """发票模型.

    金额以最小货币单位(分)存储为整数,避免浮点误差.

    Attributes:
        id: 发票主键,由数据库列默认值在插入时生成的 UUID 文本,创建后不再变化.
        customer_id: 关联客户 ID.
        amount: 金额,单位为分,严格大于 0.
        status: 发票状态,仅允许 pending/paid.
        date: 开票日期,创建时写入,更新操作不会修改.

    """

    __tablename__ = "invoices"

    id = db.Column(db.String(36), primary_key=True, server_default=generate_invoice_id())
    customer_id = db.Column(db.String(36), db.ForeignKey("customers.id"), nullable=False, index=True)
    amount = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=InvoiceStatus.PENDING)
    date = db.Column(db.Date, nullable=False)

    __table_args__ = (
        db.CheckConstraint("amount > 0", name="ck_invoices_amount_positive"),
        db.CheckConstraint("status IN ('pending', 'paid')", name="ck_invoices_status"),
    )

    def __repr__(self) -> str:
        """返回发票的调试字符串."""
        return f"<Invoice {self.id} {self.status} {self.amount}>"

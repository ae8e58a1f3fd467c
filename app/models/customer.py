"""发票看板 - 客户模型."""

from uuid import uuid4

from app import db


class Customer(db.Model):
    """客户模型.

    只读实体,供发票列表展示客户名称以及表单下拉选择.

    Attributes:
        id: 客户主键(UUID 文本).
        name: 客户名称.
        email: 联系邮箱.
        image_url: 头像地址,可选.

    """

    __tablename__ = "customers"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    image_url = db.Column(db.String(255), nullable=True)

    invoices = db.relationship("Invoice", backref="customer", lazy="dynamic")

    def __repr__(self) -> str:
        """返回客户的调试字符串."""
        return f"<Customer {self.name}>"

from sqlalchemy import Column, String, Float, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from ..database import Base
from .common import generate_id, utcnow


class Product(Base):
    """
    사용자가 등록하고 관리하는 재고 상품을 나타냅니다.
    상품을 생성한 사용자가 소유자(owner)가 되며 소유자는 변경되지 않습니다.
    상품 이름은 소문자로 저장되고, (owner_id, name) 쌍은 유일해야 합니다.
    """
    __tablename__ = "products"
    __table_args__ = (UniqueConstraint("owner_id", "name", name="uq_product_owner_name"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    owner_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=False)
    unit_price = Column(Float, nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    owner = relationship("User")

    def to_dict(self, include_owner: bool = False):
        """include_owner가 True이면 owner 필드에 소유자 정보를 포함합니다."""
        return {
            "id": self.id,
            "owner": self.owner.to_dict() if include_owner and self.owner else self.owner_id,
            "name": self.name,
            "quantity": self.quantity,
            "unitPrice": self.unit_price,
            "description": self.description,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

from sqlalchemy import Column, String, DateTime
from ..database import Base
from .common import generate_id, utcnow


class User(Base):
    """
    API에 가입하여 로그인하고 상품을 소유할 수 있는 계정을 나타냅니다.
    email과 username은 각각 전역적으로 유일하며, username은 항상 소문자로 저장됩니다.
    비밀번호는 솔트가 포함된 bcrypt 해시로만 저장되고 응답에 절대 포함되지 않습니다.
    """
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "username": self.username,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

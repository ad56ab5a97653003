from passlib.context import CryptContext


class PasswordHasher:
    """passlib의 bcrypt 스킴으로 비밀번호를 해시하고 검증합니다."""

    def __init__(self, rounds: int = 12):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify(self, plain_password: str, hashed: str) -> bool:
        return self.pwd_context.verify(plain_password, hashed)

from sqlalchemy import Column, Integer, String
from eclinic.database import Base


class User(Base):
    __tablename__ = "users"

    # sqlite_autoincrement keeps ids from ever being reused
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(200), nullable=False)
    role = Column(String(100), nullable=False)
    recovery_question = Column(String(500))
    recovery_answer_hash = Column(String(255))  # hash of the lower-cased answer

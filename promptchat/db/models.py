"""SQLAlchemy ORM models."""
import secrets
import time

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from promptchat.infrastructure.database.base import Base


def generate_object_id() -> str:
    """24 hex chars: 4-byte timestamp followed by 8 random bytes."""
    return f"{int(time.time()):08x}{secrets.token_hex(8)}"


class User(Base):
    __tablename__ = "users"

    id = Column(String(24), primary_key=True, default=generate_object_id)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="user")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    last_login_at = Column(DateTime(timezone=True))


class PromptTemplate(Base):
    __tablename__ = "prompt_templates"
    __table_args__ = (Index("ix_prompt_templates_category_active", "category", "is_active"),)

    id = Column(String(24), primary_key=True, default=generate_object_id)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(String(500), nullable=False)
    template = Column(Text, nullable=False)
    system_instructions = Column(Text, nullable=False)
    category = Column(String(50), nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    usage_count = Column(Integer, nullable=False, default=0)
    created_by = Column(String(24), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    creator = relationship("User", lazy="selectin")
    tags = relationship(
        "PromptTemplateTag",
        back_populates="template",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PromptTemplateTag.position",
    )


class PromptTemplateTag(Base):
    __tablename__ = "prompt_template_tags"
    __table_args__ = (UniqueConstraint("template_id", "tag", name="uq_prompt_template_tags_template_tag"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    template_id = Column(String(24), ForeignKey("prompt_templates.id", ondelete="CASCADE"), nullable=False, index=True)
    tag = Column(String(30), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    template = relationship("PromptTemplate", back_populates="tags")


class Conversation(Base):
    __tablename__ = "conversations"
    __table_args__ = (Index("ix_conversations_user_created", "user_id", "created_at"),)

    id = Column(String(24), primary_key=True, default=generate_object_id)
    user_id = Column(String(24), ForeignKey("users.id"), nullable=False, index=True)
    template_id = Column(String(24), ForeignKey("prompt_templates.id"), nullable=False, index=True)
    title = Column(String(200))
    status = Column(String(20), nullable=False, default="completed", index=True)
    total_tokens = Column(Integer, nullable=False, default=0)
    model = Column(String(100), nullable=False)
    user_prompt = Column(Text)
    combined_prompt = Column(Text)
    response_time = Column(Float)
    temperature = Column(Float)
    max_tokens = Column(Integer)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    template = relationship("PromptTemplate", lazy="selectin")
    messages = relationship(
        "ConversationMessage",
        back_populates="conversation",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ConversationMessage.position",
    )


class ConversationMessage(Base):
    __tablename__ = "conversation_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    conversation_id = Column(String(24), ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    role = Column(String(20), nullable=False)
    content = Column(Text, nullable=False)
    token_count = Column(Integer, nullable=False, default=0)
    timestamp = Column(DateTime(timezone=True), server_default=func.now())

    conversation = relationship("Conversation", back_populates="messages")

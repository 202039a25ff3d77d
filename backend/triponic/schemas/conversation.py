import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    role: Role
    content: str

    model_config = ConfigDict(frozen=True)

    def as_chat(self) -> dict:
        """Role-tagged dict in the shape chat-completion APIs expect."""
        return {"role": self.role.value, "content": self.content}


class Conversation(BaseModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    preference_id: uuid.UUID
    messages: list[Message] = Field(default_factory=list)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConversationCreate(BaseModel):
    preference_id: uuid.UUID

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageCreate(BaseModel):
    content: str

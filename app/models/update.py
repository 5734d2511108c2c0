from pydantic import BaseModel, Field
from typing import Optional

class User(BaseModel):
    id: int
    is_bot: bool = False
    first_name: Optional[str] = None
    username: Optional[str] = None

class Chat(BaseModel):
    id: int
    type: Optional[str] = None

class Message(BaseModel):
    message_id: int
    chat: Chat
    from_: Optional[User] = Field(default=None, alias="from")   # "from" es palabra reservada
    date: Optional[int] = None
    text: Optional[str] = None

class CallbackQuery(BaseModel):
    id: str
    from_: Optional[User] = Field(default=None, alias="from")
    message: Optional[Message] = None
    data: Optional[str] = None

class Update(BaseModel):
    update_id: int
    message: Optional[Message] = None
    callback_query: Optional[CallbackQuery] = None

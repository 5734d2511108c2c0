from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError
from typing import Optional, Union

from app.shared.telegram.keyboard import BACK_CAPTION


def _validate_caption(v: str) -> str:
    v = v.strip()
    if not v:
        raise PydanticCustomError('text_empty', 'El texto del botón no puede estar vacío')
    if v == BACK_CAPTION:
        raise PydanticCustomError(
            'text_reserved',
            'El texto del botón coincide con el botón de regreso reservado'
        )
    return v


class ButtonCreate(BaseModel):
    """Schema para crear un botón, opcionalmente anidado bajo un padre"""
    model_config = ConfigDict(populate_by_name=True)

    text: str
    response: str = Field(..., min_length=1)
    parent_id: Optional[str] = Field(default=None, alias="parentId")

    @field_validator('text')
    def validate_text(cls, v):
        return _validate_caption(v)

    @field_validator('parent_id', mode='before')
    def coerce_parent_id(cls, v):
        # "" y null significan botón de primer nivel
        return str(v) if v not in (None, "") else None


class ButtonUpdate(BaseModel):
    """Schema para editar texto y respuesta de un botón de primer nivel"""
    text: str
    response: str = Field(..., min_length=1)

    @field_validator('text')
    def validate_text(cls, v):
        return _validate_caption(v)


class AuthRequest(BaseModel):
    """Schema para validar un chat id administrador"""
    model_config = ConfigDict(populate_by_name=True)

    chat_id: Union[int, str] = Field(..., alias="chatId")

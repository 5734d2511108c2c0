from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class ButtonNode(BaseModel):
    """
    Nodo del árbol de botones.
    Un nodo con sub-botones se muestra como menú; sin ellos es una respuesta final.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    text: str
    response: str = ""
    sub_buttons: List["ButtonNode"] = Field(default_factory=list, alias="subButtons")

    @field_validator("id", mode="before")
    def coerce_id(cls, v):
        # Documentos antiguos pueden traer ids numéricos
        return str(v)

    @field_validator("response", mode="before")
    def coerce_response(cls, v):
        return v or ""

    @field_validator("sub_buttons", mode="before")
    def coerce_sub_buttons(cls, v):
        return v or []

    @property
    def has_children(self) -> bool:
        return len(self.sub_buttons) > 0


class ButtonPatch(BaseModel):
    """Campos editables de un nodo existente."""
    text: str
    response: str


ButtonTree = List[ButtonNode]


def parse_tree(raw: Optional[list]) -> ButtonTree:
    """Convierte el documento JSON persistido en una lista de nodos."""
    return [ButtonNode.model_validate(item) for item in (raw or [])]


def dump_tree(tree: ButtonTree) -> list:
    """Serializa el árbol con los nombres de campo persistidos (subButtons)."""
    return [node.model_dump(by_alias=True) for node in tree]

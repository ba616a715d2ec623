"""Form definition models — the container/field tree a form is compiled from."""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from formguard.models.fields import FieldSpec


class ContainerNode(BaseModel):
    """A structural element (fieldset, list item, div) wrapping other nodes.

    Containers whose tag is a configured group tag are error-reporting groups.
    """

    kind: Literal["container"] = "container"
    id: Optional[str] = None
    tag: str = "div"
    children: list["FormNode"] = Field(default_factory=list)


class FieldNode(FieldSpec):
    """A form control in the definition tree."""

    kind: Literal["field"] = "field"


FormNode = Annotated[Union[ContainerNode, FieldNode], Field(discriminator="kind")]

ContainerNode.model_rebuild()


class FormDefinition(BaseModel):
    """A whole form: its id and its nodes in document order."""

    id: str = Field(min_length=1, max_length=200)
    children: list[FormNode] = Field(default_factory=list)

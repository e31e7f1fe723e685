"""The Tool contract.

Any object with ``name``, ``args_model``, ``definition()`` and ``call()``
satisfies the ``Tool`` protocol. ``BaseTool`` fills in ``definition()``
from a pydantic argument model so concrete tools only declare their
name, description, argument model and ``call()``.
"""

from __future__ import annotations

from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel

from toolagent.toolkit.models import ToolDefinition


@runtime_checkable
class Tool(Protocol):
    """Protocol for tools the agent loop can dispatch to.

    ``call()`` receives a validated instance of ``args_model`` and returns
    the output text. It signals failure by raising; ``ToolError``
    subclasses carry a message meant for the model.
    """

    @property
    def name(self) -> str: ...

    @property
    def args_model(self) -> type[BaseModel]: ...

    def definition(self) -> ToolDefinition: ...

    def call(self, args: Any) -> str: ...


def schema_from_model(model: type[BaseModel]) -> dict[str, Any]:
    """Build a compact JSON Schema object from a pydantic model.

    Drops pydantic's ``title`` keys so the result matches hand-written
    provider schemas: ``{"type": "object", "properties": {...},
    "required": [...]}``.
    """
    schema = model.model_json_schema()
    properties = {
        prop_name: {k: v for k, v in prop.items() if k != "title"}
        for prop_name, prop in schema.get("properties", {}).items()
    }
    return {
        "type": "object",
        "properties": properties,
        "required": list(schema.get("required", [])),
    }


class BaseTool:
    """Convenience base class implementing ``definition()``.

    Subclasses set ``name``, ``description`` and ``args_model`` as class
    attributes and implement ``call()``::

        class EchoArgs(BaseModel):
            text: str = Field(description="Text to echo")

        class Echo(BaseTool):
            name = "echo"
            description = "Echo the input text"
            args_model = EchoArgs

            def call(self, args: EchoArgs) -> str:
                return args.text
    """

    name: ClassVar[str]
    description: ClassVar[str] = ""
    args_model: ClassVar[type[BaseModel]]

    def parameters(self) -> dict[str, Any]:
        return schema_from_model(self.args_model)

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters=self.parameters(),
        )

    def call(self, args: Any) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

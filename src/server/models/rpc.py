"""JSON-RPC 2.0 envelope models for the tool-invocation endpoint."""
from typing import Annotated, Literal, Optional, Union, Any
from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr

RequestId = Union[StrictInt, StrictFloat, StrictStr]


class RpcRequest(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    id: Optional[RequestId] = None
    method: Annotated[str, Field(min_length=1)]
    params: Optional[dict[str, Any]] = None

    @property
    def is_notification(self) -> bool:
        return self.id is None


class RpcError(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None


class RpcErrorResponse(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    id: Optional[RequestId] = None
    error: RpcError


class RpcResultResponse(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    id: RequestId
    result: dict[str, Any]


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Tool payloads travel as opaque JSON text."""
    content: list[TextContent]
    isError: bool = False

    @classmethod
    def of(cls, payload: BaseModel) -> "ToolResult":
        return cls(content=[TextContent(text=payload.model_dump_json())])


class ToolCallParams(BaseModel):
    name: Annotated[str, Field(min_length=1)]
    arguments: dict[str, Any] = Field(default_factory=dict)

"""Endpoint response DTOs.

Type-safe response containers that provide consistent structure
across all endpoint responses.
"""

from dataclasses import dataclass, field
from typing import Any

from fastapi.responses import JSONResponse, Response


@dataclass(frozen=True, slots=True)
class ModelEntry:
    """One item of the OpenAI ``/v1/models`` list."""

    id: str  # noqa: A003
    owned_by: str
    created: int
    object: str = "model"  # noqa: A003
    permission: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "object": self.object,
            "created": self.created,
            "owned_by": self.owned_by,
            "permission": list(self.permission),
            "root": self.id,
            "parent": None,
        }


@dataclass(frozen=True, slots=True)
class ModelsListResponse:
    """Structured response from /v1/models endpoint."""

    data: list[ModelEntry]
    status: int = 200

    def to_response(self) -> Response:
        """Convert to FastAPI response."""
        return JSONResponse(
            status_code=self.status,
            content={"object": "list", "data": [m.to_dict() for m in self.data]},
        )


@dataclass(frozen=True, slots=True)
class KeyStatusResponse:
    """Structured response from /v1/keys/status.

    ``providers`` maps provider name to key count, positional statuses and
    the next start index. Key values are never part of it.
    """

    providers: dict[str, dict[str, Any]]
    status: int = 200

    def to_response(self) -> Response:
        return JSONResponse(status_code=self.status, content={"providers": self.providers})

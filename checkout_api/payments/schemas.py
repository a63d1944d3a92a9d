from typing import Any, Dict
from pydantic import BaseModel, Field


# Modèles de réponse (documentation OpenAPI)
class PreferenceResponse(BaseModel):
    init_point: str


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)

"""Advisor Pydantic schemas for request/response validation."""
from pydantic import BaseModel, Field


class AdvisorRequest(BaseModel):
    """Request for strategic advice on a simulation."""
    context: str = Field("", description="Simulation context, typically advisorContext from POST /oracle/simulate")
    prompt: str = Field(..., description="The user's question")


class AdvisorResponse(BaseModel):
    """Advice text. Always present, falls back to a fixed message."""
    advice: str = Field(..., description="Free-form advice or the fallback message")

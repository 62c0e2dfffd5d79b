"""Oracle advisor API routes.

Endpoints:
- POST /oracle/advisor - Free-text advice on a simulation (never fails)
"""
from fastapi import APIRouter, Depends

from oracle.advisor import schemas
from oracle.advisor.responder import NarrativeAdvisor, OpenAIAdvisor, ask_advisor
from oracle.auth.dependencies import require_admin
from oracle.models import User

router = APIRouter()


def get_narrative_advisor() -> NarrativeAdvisor:
    """The configured advice backend."""
    return OpenAIAdvisor()


@router.post("/advisor", response_model=schemas.AdvisorResponse)
async def ask_oracle(
    request: schemas.AdvisorRequest,
    advisor: NarrativeAdvisor = Depends(get_narrative_advisor),
    current_user: User = Depends(require_admin),
):
    """
    Ask the Oracle for strategic advice.

    Always answers 200: on timeout or backend failure the advice is the
    fixed fallback message.
    """
    advice = await ask_advisor(advisor, request.context, request.prompt)
    return schemas.AdvisorResponse(advice=advice)

from typing import Annotated

from fastapi import Depends, Request

from app.services.analysis import AnalysisService


def get_analysis_service(request: Request) -> AnalysisService:
    return request.app.state.analysis_service


AnalysisDep = Annotated[AnalysisService, Depends(get_analysis_service)]

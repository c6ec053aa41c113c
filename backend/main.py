import logging
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

import config
import gemini
from actions import export_csv, filter_action_items, update_status
from errors import AnalyzerError, InvalidInput
from models import (
    ActionItem,
    AnalysisResult,
    AnalyzeRequest,
    AnswerResponse,
    ExportRequest,
    QuestionRequest,
    StatusUpdateRequest,
)

logging.basicConfig(
    level=config.log_level(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allow_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)


def _failure(operation: str, exc: AnalyzerError) -> HTTPException:
    # Kind is logged, the user-facing text stays uniform
    if isinstance(exc, InvalidInput):
        logger.warning(f"{operation} rejected: kind={type(exc).__name__}, error={exc}")
        status_code = 400
    else:
        logger.error(f"{operation} failed: kind={type(exc).__name__}, error={exc}", exc_info=True)
        status_code = 502
    return HTTPException(status_code=status_code, detail=f"{operation} failed: {exc}")


@app.post("/analyze", response_model=AnalysisResult, response_model_by_alias=True)
async def analyze(body: AnalyzeRequest):
    """
    Sends the transcript to Gemini and returns its topics, summary and action items.
    """
    try:
        return await gemini.analyze_transcript(body.transcript, body.api_key)
    except AnalyzerError as e:
        raise _failure("Analysis", e)


@app.post("/ask", response_model=AnswerResponse)
async def ask(body: QuestionRequest):
    """
    Answers a free-form question using only the transcript.
    """
    try:
        answer = await gemini.answer_question(body.transcript, body.question, body.api_key)
    except AnalyzerError as e:
        raise _failure("Q&A", e)
    return AnswerResponse(answer=answer)


@app.post("/action-items/status", response_model=List[ActionItem], response_model_by_alias=True)
def change_status(body: StatusUpdateRequest):
    try:
        return update_status(body.action_items, body.id, body.status)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Action item {body.id} not found")


@app.post("/action-items/export")
def export_action_items(body: ExportRequest):
    items = filter_action_items(body.action_items, body.status, body.urgency, body.assignee)
    return Response(
        content=export_csv(items),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="action_items.csv"'},
    )


@app.get("/health")
def health():
    return {"status": "ok"}

"""Gemini gateway: one request per operation, no retries.

Both operations validate their arguments before touching the client, so an
empty key or transcript never reaches the network.
"""
import logging
from typing import Optional

import google.generativeai as genai

import config
from errors import InvalidInput, UpstreamError
from models import AnalysisResult
from normalizer import normalize_analysis
from prompts import build_analysis_prompt, build_question_prompt

logger = logging.getLogger(__name__)

JSON_OUTPUT = {"response_mime_type": "application/json"}


def _require(value: str, message: str) -> None:
    if not value or not value.strip():
        raise InvalidInput(message)


async def _generate(prompt: str, api_key: str, model_name: Optional[str], generation_config=None) -> str:
    model_name = model_name or config.gemini_model()
    try:
        # configure, build and await in one step so the model binds this call's key.
        # Each call therefore gets a fresh async client; it is not closed here and
        # is released when the model goes out of scope.
        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(model_name)
        response = await model.generate_content_async(prompt, generation_config=generation_config)
    except Exception as e:
        logger.error(f"Gemini request failed: model={model_name}, error={type(e).__name__}")
        raise UpstreamError(f"Gemini request failed: {e}", cause=e) from e

    try:
        # .text raises when the candidate was blocked or has no text parts
        return response.text
    except ValueError as e:
        raise UpstreamError(f"Gemini returned no usable text: {e}", cause=e) from e


async def request_analysis(transcript: str, api_key: str, model_name: Optional[str] = None) -> str:
    """Send the analysis prompt and return the raw (candidate JSON) text."""
    _require(api_key, "API Key is required.")
    _require(transcript, "Transcript cannot be empty.")

    logger.info(f"Requesting analysis: transcript_length={len(transcript)}")
    return await _generate(build_analysis_prompt(transcript), api_key, model_name, JSON_OUTPUT)


async def request_answer(
    transcript: str, question: str, api_key: str, model_name: Optional[str] = None
) -> str:
    """Send the question prompt and return the model's answer verbatim."""
    _require(api_key, "API Key is required.")
    _require(transcript, "Transcript cannot be empty.")
    _require(question, "Question cannot be empty.")

    logger.info(
        f"Requesting answer: transcript_length={len(transcript)}, question_length={len(question)}"
    )
    return await _generate(build_question_prompt(transcript, question), api_key, model_name)


async def analyze_transcript(transcript: str, api_key: str) -> AnalysisResult:
    """Run the analysis exchange and normalize its output.

    MalformedPayload and SchemaMismatch propagate unchanged; both are
    ResponseFormatError subclasses.
    """
    raw = await request_analysis(transcript, api_key)
    return normalize_analysis(raw)


async def answer_question(transcript: str, question: str, api_key: str) -> str:
    answer = await request_answer(transcript, question, api_key)
    if not answer or not answer.strip():
        raise UpstreamError("Gemini returned an empty answer.")
    return answer

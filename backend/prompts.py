from models import ActionItemStatus, ActionItemUrgency, UNASSIGNED


def _quoted(values) -> str:
    names = [f'"{v.value}"' for v in values]
    return ", ".join(names[:-1]) + f", or {names[-1]}"


def build_analysis_prompt(transcript: str) -> str:
    return f"""
    Analyze the following meeting transcript and provide a structured JSON output.
    The JSON should have three top-level keys: "topics", "summary", and "actionItems".

    - "topics": An array of objects. Each object must have two keys:
      - "name": A string for the main topic discussed.
      - "transcriptSections": An array of strings, where each string is a direct quote or relevant excerpt from the transcript that pertains to this topic. Extract at least 2-3 relevant sections per topic.
    - "summary": An object with four keys:
      - "overview": A brief paragraph summarizing the meeting.
      - "mainPoints": An array of strings, with each string being a key takeaway or decision.
      - "conclusion": A paragraph summarizing the meeting's conclusion and next steps.
      - "unansweredQuestions": An array of strings for questions that were raised but not answered. Return an empty array if none.
    - "actionItems": An array of objects, where each object represents a task. Each object must have:
      - "task": A string describing the action item.
      - "assignedTo": A string with the name of the person(s) assigned. Use "{UNASSIGNED}" if not specified.
      - "urgency": A string, must be one of {_quoted(ActionItemUrgency)}.
      - "status": A string, must be "{ActionItemStatus.TO_DO.value}".

    Transcript:
    ---
    {transcript}
    ---

    Provide only the raw JSON output without any conversational text or markdown fences.
    """


def build_question_prompt(transcript: str, question: str) -> str:
    return f"""
    Based on the following transcript, please answer the user's question.
    Provide a concise and direct answer based only on the information in the transcript.
    If the answer is not in the transcript, state that the information is not available in the provided text.

    ---
    Transcript:
    {transcript}
    ---
    Question: {question}
    ---
    """

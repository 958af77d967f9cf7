SYSTEM_PROMPT = (
    "Be precise and concise. Respond ONLY with a valid JSON object, "
    "no markdown, no explanation."
)


USER_TEMPLATE = """
Evaluate the following resume for the given job description. Respond ONLY with a valid JSON object with the following keys:
- "score" (number, 0-100): Numeric fit score.
- "reasoning": Concise explanation for the score (max 2 sentences).
- "improvements": Array of up to 2 actionable suggestions for the candidate.
- "metrics": Array of up to 5 key criteria or skills matched/missing.

Job Description:
{jd}

Resume:
{resume}
"""

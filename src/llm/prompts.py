# Prompts for the AI task parse.
# The output schema mirrors ParsedTask; dueDate is ISO-8601 or null.
SYSTEM_PROMPT = """You turn one line of natural-language task input into a structured task.
Respond with JSON only, no other text."""

TASK_PARSE_PROMPT = """Parse the following natural language task input and extract structured information. Return ONLY valid JSON with this exact structure:

{{
  "name": "main task description",
  "assignee": "person name or null",
  "dueDate": "ISO date string or null",
  "priority": "P1, P2, P3, or P4"
}}

Rules:
- Extract the main action/objective as the task name
- Find person names (usually after "assign", "@", or before "by")
- Parse dates intelligently (today, tomorrow, next Friday, June 20th, etc.)
- Use YYYY-MM-DDTHH:MM:SS for dueDate; if no time is given, use 23:59:59
- Extract priority levels P1-P4 (default to P3 if not specified)
- P1 = Critical/Urgent, P2 = High, P3 = Medium, P4 = Low
- Return null for missing fields (except priority which defaults to P3)

Current date and time: {now}

Input: "{text}"

JSON:"""


def build_task_prompt(text: str, now_iso: str) -> str:
    return TASK_PARSE_PROMPT.format(text=text.replace('"', '\\"'), now=now_iso)

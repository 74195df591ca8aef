from typing import Dict, List

from webgen.ir.errors import InvalidInput


SYSTEM_PROMPT = """
You are an AI that generates full-stack web applications using React, Vite,
TypeScript and Tailwind CSS.

Rules:
- Output ONLY one valid JSON object
- No markdown, no code fences, no explanations before or after the JSON
- Escape newlines, quotes and backslashes inside string values
- Use an empty string for a part the application does not need

JSON schema:
{
  "frontend": "string - complete frontend source code",
  "backend": "string - complete backend source code",
  "database": "string - database schema (SQL)"
}
"""


def build_messages(instruction: str) -> List[Dict[str, str]]:
    """
    Build the two-message conversation sent to the model.
    The instruction is passed through verbatim.
    """
    if not isinstance(instruction, str) or not instruction.strip():
        raise InvalidInput("instruction must be a non-empty string")

    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": instruction},
    ]

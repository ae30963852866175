DROP_PROMPT = """You read card drop images from a collectible card game bot.

The image shows three or four cards side by side. Each card has:
- the character name printed near the bottom of the card,
- the series name printed directly under the character name,
- an edition / print number in the lower-left corner.

Your job:
- Transcribe exactly what is printed. Do not correct spelling.
- Keep a trailing "..." when the printed name is cut off.
- Output ONLY a single JSON object, no markdown, no code fences.

JSON schema:

  {
    "cards": [
      {
        "name": "string",
        "series": "string",
        "edition": "string or null"
      }
    ]
  }

List the cards from left to right. If the image holds no cards, return
{"cards": []}.
"""

REPAIR_PROMPT = (
    "The following text was intended to be a JSON object listing the cards of a drop. "
    "It may contain trailing commas or other mistakes. Return ONLY valid JSON for the same data.\n"
    "Broken JSON:\n{raw_text}"
)

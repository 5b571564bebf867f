ANALYSIS_INSTRUCTION = """
Analyze this image in extreme detail. Provide a comprehensive prompt that could be used to recreate this image using an AI image generator. Include specific details about the subject, style, lighting, composition, shooting angle, lens settings, focal length, image dimensions/aspect ratio, and colors. Provide both English and Chinese translations for each field.
"""


MODIFICATION_PROMPT = """Here is the current image prompt JSON:
{prompt_json}

User modification request: "{instruction}"

Please update the JSON according to the user's request. Keep the exact same JSON structure, updating both the English ('en') and Chinese ('zh') fields to reflect the changes."""

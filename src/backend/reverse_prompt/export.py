import json
from enum import Enum
from typing import Any, Dict, Optional


class ExportMode(str, Enum):
    ALL = "all"
    EN = "en"
    ZH = "zh"


def project_language(result: Dict[str, Any], lang: str) -> Dict[str, Any]:
    """
    Reduces each bilingual field to the single string for `lang`.
    Values that are not objects holding `lang` are kept as they are.
    """
    projected = {}
    for key, value in result.items():
        if isinstance(value, dict) and lang in value:
            projected[key] = value[lang]
        else:
            projected[key] = value
    return projected


def export_text(result: Optional[Dict[str, Any]], mode: ExportMode) -> Optional[str]:
    if not result:
        return None
    mode = ExportMode(mode)
    payload = result if mode == ExportMode.ALL else project_language(result, mode.value)
    return json.dumps(payload, indent=2, ensure_ascii=False)

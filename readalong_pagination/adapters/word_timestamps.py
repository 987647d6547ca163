"""Adapter: word-timestamp JSON to WordTimestamp objects.

WHY: Word timings arrive as JSON, either straight from the alignment
step (a bare array) or from a stored word-timestamp file that also
carries the chunk's originalText. The engine needs validated, typed
WordTimestamp objects and, when available, the original text for
delimiter detection.

HOW: The document is validated with jsonschema against
word_timestamps_schema.json (a bare array is wrapped as
{"words": [...]} first), then each entry becomes a WordTimestamp.

RULES:
- Required per word: word (string), start and end (non-negative numbers)
- index is optional and defaults to the word's list position
- Extra keys are allowed and ignored
- Validation failures raise InvalidWordTimestampsError with the JSON path
- The source text is originalText, else processedText, else None
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import jsonschema
from jsonschema.exceptions import best_match

from readalong_pagination.core.ir import WordTimestamp
from readalong_pagination.errors import InvalidWordTimestampsError

_SCHEMA_PATH = Path(__file__).resolve().parent / "word_timestamps_schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def _get_schema() -> Dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _validate(document: Dict[str, Any], wrapped: bool) -> None:
    validator = jsonschema.Draft7Validator(_get_schema())
    error = best_match(validator.iter_errors(document))
    if error is None:
        return
    path = list(error.absolute_path)
    if wrapped and path and path[0] == "words":
        path = path[1:]
    raise InvalidWordTimestampsError(error.message, path)


def parse_word_timestamps(data: Any) -> List[WordTimestamp]:
    """Validate parsed JSON and convert it to WordTimestamp objects.

    Args:
        data: A list of word dicts, or a dict with a "words" list.

    Returns:
        WordTimestamps in input order.

    Raises:
        InvalidWordTimestampsError: If the document does not match the schema.
    """
    words, _ = _parse_document(data)
    return words


def _parse_document(data: Any) -> Tuple[List[WordTimestamp], Optional[str]]:
    wrapped = isinstance(data, list)
    document = {"words": data} if wrapped else data
    if not isinstance(document, dict):
        raise InvalidWordTimestampsError(
            "expected a list of words or an object with a 'words' list, got {}".format(
                type(data).__name__
            )
        )
    _validate(document, wrapped)

    words = [
        WordTimestamp(
            word=item["word"],
            start=float(item["start"]),
            end=float(item["end"]),
            index=int(item.get("index", position)),
        )
        for position, item in enumerate(document["words"])
    ]
    source_text = document.get("originalText") or document.get("processedText") or None
    return words, source_text


def load_word_timestamps(
    source: Union[str, Path],
) -> Tuple[List[WordTimestamp], Optional[str]]:
    """Read a word-timestamp JSON file.

    Args:
        source: Path to the file, or "-" for stdin.

    Returns:
        (words, source_text) where source_text may be None.

    Raises:
        InvalidWordTimestampsError: If the file is not valid JSON or does
            not match the schema.
        OSError: If the file cannot be read.
    """
    if str(source) == "-":
        raw = sys.stdin.read()
    else:
        with open(source, "r", encoding="utf-8") as f:
            raw = f.read()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidWordTimestampsError("not valid JSON ({})".format(exc)) from exc

    return _parse_document(data)

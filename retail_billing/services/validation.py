"""Validation of sale submission payloads against the JSON schema."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

import jsonschema

SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "sale_payload.schema.json"


class ValidationService:
    """Validate payloads against the SalePayload schema."""

    def __init__(self, schema_path: Path = SCHEMA_PATH) -> None:
        with schema_path.open("r", encoding="utf-8") as handle:
            self.schema = json.load(handle)

        jsonschema.validators.Draft202012Validator.check_schema(self.schema)
        self._validator = jsonschema.validators.Draft202012Validator(self.schema)

    def validate(self, payload: Dict[str, Any]) -> Tuple[bool, List[Dict[str, str]]]:
        errors: List[Dict[str, str]] = []

        for error in self._validator.iter_errors(payload):
            path = "/" + "/".join(str(part) for part in error.absolute_path)
            errors.append({"path": path, "message": error.message})

        errors.sort(key=lambda item: item["path"])
        return not errors, errors

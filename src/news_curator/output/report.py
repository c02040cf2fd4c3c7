from __future__ import annotations

import json
import sys

from pydantic import BaseModel


def emit_report(report: BaseModel, **extra: object) -> None:
    payload = report.model_dump(mode="json", by_alias=True)
    payload.update(extra)
    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")

"""
Course catalog loader: reads the JSON course file once at startup.

File format: a JSON array of ``{"name": str, "price": int}`` records.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, StrictInt, TypeAdapter, ValidationError

from core.logging_config import get_logger
from domain.catalog import Course, CourseCatalog
from domain.common.exceptions import CatalogLoadError, DomainValidationException


logger = get_logger(__name__)


class CourseRecord(BaseModel):
    name: str
    price: StrictInt

    model_config = ConfigDict(extra="ignore")


_records_adapter = TypeAdapter(list[CourseRecord])


def parse_catalog(raw: str, *, source: str | None = None) -> CourseCatalog:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CatalogLoadError(f"Course catalog is not valid JSON: {exc}", path=source) from exc
    try:
        records = _records_adapter.validate_python(data)
    except ValidationError as exc:
        raise CatalogLoadError(f"Course catalog is malformed: {exc.errors()[0].get('msg')}", path=source) from exc
    try:
        return CourseCatalog.from_courses(Course(name=r.name, price=r.price) for r in records)
    except DomainValidationException as exc:
        raise CatalogLoadError(f"Course catalog is malformed: {exc.message}", path=source) from exc


def load_catalog(path: Union[str, Path]) -> CourseCatalog:
    """Load the catalog or raise CatalogLoadError (callers abort startup)."""
    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogLoadError(f"Course catalog unreadable: {exc.strerror or exc}", path=str(file_path)) from exc
    catalog = parse_catalog(raw, source=str(file_path))
    logger.info("catalog_loaded", path=str(file_path), courses=catalog.names)
    return catalog

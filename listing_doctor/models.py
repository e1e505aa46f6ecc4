"""Data model shared by every pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Optional

FORMAT_MINISTERIAL = "ministerial"
FORMAT_VENDOR_EXPORT = "vendor-export"
FORMAT_CUSTOM = "custom"


@dataclass(frozen=True)
class RawTable:
    """Tokenized input: one header row plus string cells, whatever the source."""

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    source_format: str = "delimited"
    delimiter: Optional[str] = None
    encoding: Optional[str] = None
    sheet_name: Optional[str] = None
    sheet_names: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def column_count(self) -> int:
        return len(self.headers)


@dataclass(frozen=True)
class FieldPattern:
    name: str
    aliases: tuple[str, ...]


@dataclass
class FieldMapping:
    """Canonical field -> source header, plus what the UI needs to correct it."""

    columns: dict[str, str] = field(default_factory=dict)
    indices: dict[str, int] = field(default_factory=dict)
    scores: dict[str, float] = field(default_factory=dict)
    alternates: dict[str, list[str]] = field(default_factory=dict)
    suggestions: dict[str, list[str]] = field(default_factory=dict)
    unmapped: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def confidence(self) -> float:
        if not self.scores:
            return 0.0
        return sum(self.scores.values()) / len(self.scores)

    @property
    def mapped_count(self) -> int:
        return len(self.columns)

    def header_for(self, field_name: str) -> Optional[str]:
        return self.columns.get(field_name)

    def index_for(self, field_name: str) -> Optional[int]:
        return self.indices.get(field_name)

    def all_suggestions(self) -> dict[str, list[str]]:
        merged = {name: list(headers) for name, headers in self.alternates.items()}
        for name, headers in self.suggestions.items():
            merged.setdefault(name, list(headers))
        return merged


@dataclass
class PropertyRecord:
    """One listing that survived every row gate.

    Typed canonical fields are optional. ``extras`` keeps mapped catalog
    fields that have no typed slot, ``raw_data`` keeps every original
    header -> cell value of the row.
    """

    property_number: Optional[str] = None
    property_type: Optional[str] = None
    status: Optional[str] = None

    price_per_m2: Optional[float] = None
    total_price: Optional[float] = None
    final_price: Optional[float] = None
    area: Optional[float] = None
    parking_space: Optional[str] = None
    parking_price: Optional[float] = None

    wojewodztwo: Optional[str] = None
    powiat: Optional[str] = None
    gmina: Optional[str] = None
    miejscowosc: Optional[str] = None
    ulica: Optional[str] = None
    numer_nieruchomosci: Optional[str] = None
    kod_pocztowy: Optional[str] = None

    liczba_pokoi: Optional[int] = None
    kondygnacja: Optional[int] = None
    powierzchnia_balkon: Optional[float] = None
    powierzchnia_taras: Optional[float] = None
    powierzchnia_loggia: Optional[float] = None
    powierzchnia_ogrod: Optional[float] = None
    construction_year: Optional[int] = None
    energy_class: Optional[str] = None
    data_pierwszej_oferty: Optional[str] = None

    row_number: int = 0
    extras: dict[str, str] = field(default_factory=dict)
    raw_data: dict[str, str] = field(default_factory=dict)

    @classmethod
    def typed_field_names(cls) -> tuple[str, ...]:
        return _TYPED_FIELDS

    def get(self, name: str) -> Any:
        if name in _TYPED_FIELD_SET:
            return getattr(self, name)
        return self.extras.get(name)

    def has(self, name: str) -> bool:
        value = self.get(name)
        if value is None:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        # Zero counts as missing, like an empty cell.
        return bool(value)

    def set_value(self, name: str, value: Any) -> None:
        if name in _TYPED_FIELD_SET:
            setattr(self, name, value)
        else:
            self.extras[name] = value

    def has_any_data(self) -> bool:
        if any(self.has(name) for name in _TYPED_FIELDS):
            return True
        if any(value for value in self.extras.values()):
            return True
        return any(str(value).strip() for value in self.raw_data.values())

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for name in _TYPED_FIELDS:
            value = getattr(self, name)
            if value is not None:
                payload[name] = value
        for name, value in self.extras.items():
            payload.setdefault(name, value)
        payload["raw_data"] = dict(self.raw_data)
        return payload


_NON_CANONICAL = {"row_number", "extras", "raw_data"}
_TYPED_FIELDS = tuple(f.name for f in fields(PropertyRecord) if f.name not in _NON_CANONICAL)
_TYPED_FIELD_SET = frozenset(_TYPED_FIELDS)


@dataclass(frozen=True)
class RowDiagnostic:
    row_number: int
    reason: str
    column_count: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"rowNumber": self.row_number, "reason": self.reason}
        if self.column_count is not None:
            payload["columnCount"] = self.column_count
        return payload


@dataclass
class ValidationStats:
    """Per-parse accounting. Every data row lands in exactly one counter."""

    empty_rows: int = 0
    too_few_columns: int = 0
    sold_properties: int = 0
    invalid_critical_data: int = 0
    successfully_parsed: int = 0
    details: list[RowDiagnostic] = field(default_factory=list)

    @property
    def total(self) -> int:
        return (
            self.empty_rows
            + self.too_few_columns
            + self.sold_properties
            + self.invalid_critical_data
            + self.successfully_parsed
        )

    @property
    def skipped(self) -> int:
        return self.total - self.successfully_parsed

    def to_dict(self) -> dict[str, Any]:
        return {
            "emptyRows": self.empty_rows,
            "tooFewColumns": self.too_few_columns,
            "soldProperties": self.sold_properties,
            "invalidCriticalData": self.invalid_critical_data,
            "successfullyParsed": self.successfully_parsed,
            "details": [detail.to_dict() for detail in self.details],
        }


@dataclass(frozen=True)
class FormatDetection:
    format: str
    confidence: float
    details: str
    scores: dict[str, int] = field(default_factory=dict)


@dataclass
class ComplianceReport:
    valid: bool
    compliance_score: int
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    missing_critical_fields: list[str] = field(default_factory=list)
    total_required_fields: int = 58

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "complianceScore": self.compliance_score,
            "totalRequiredFields": self.total_required_fields,
            "missingCriticalFields": list(self.missing_critical_fields),
        }


@dataclass
class ParseResult:
    success: bool
    data: list[PropertyRecord] = field(default_factory=list)
    mapping: FieldMapping = field(default_factory=FieldMapping)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    confidence: float = 0.0
    detected_format: Optional[str] = None
    format_confidence: float = 0.0
    format_details: str = ""
    total_rows: int = 0
    valid_rows: int = 0
    validation_stats: ValidationStats = field(default_factory=ValidationStats)
    sheet_name: Optional[str] = None
    delimiter: Optional[str] = None

    @classmethod
    def failed(cls, message: str) -> "ParseResult":
        return cls(success=False, errors=[message])

    @property
    def mappings(self) -> dict[str, str]:
        return dict(self.mapping.columns)

    @property
    def suggestions(self) -> dict[str, list[str]]:
        return self.mapping.all_suggestions()

    def to_dict(self, include_records: bool = True) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": self.success,
            "mappings": self.mappings,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "suggestions": self.suggestions,
            "confidence": round(self.confidence, 4),
            "detectedFormat": self.detected_format,
            "formatConfidence": round(self.format_confidence, 2),
            "formatDetails": self.format_details,
            "totalRows": self.total_rows,
            "validRows": self.valid_rows,
            "validationStats": self.validation_stats.to_dict(),
        }
        if include_records:
            payload["data"] = [record.to_dict() for record in self.data]
        return payload

"""Versioned JSON contracts for listing-doctor outputs."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from listing_doctor import __version__ as TOOL_VERSION
from listing_doctor.models import ComplianceReport, ParseResult
from listing_doctor.settings import output_stamp_override

TOOL_NAME = "listing-doctor"

CONTRACT_VERSIONS = {
    "listing_doctor.parse": "1.0.0",
    "listing_doctor.compliance": "1.0.0",
    "listing_doctor.sheets": "1.0.0",
    "listing_doctor.suggest": "1.0.0",
}


def utc_now_iso() -> str:
    override = output_stamp_override()
    if override:
        return override
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def build_contract(name: str) -> dict[str, str]:
    version = CONTRACT_VERSIONS[name]
    return {"name": name, "version": version}


def build_run_summary(
    *,
    command: str,
    input_path: Path,
    status: str = "ok",
    output_path: Optional[Path] = None,
    metrics: Optional[dict[str, Any]] = None,
    warnings: Optional[list[str]] = None,
) -> dict[str, Any]:
    return {
        "tool": TOOL_NAME,
        "command": command,
        "status": status,
        "generated_at": utc_now_iso(),
        "input_file": str(input_path),
        "output_file": str(output_path) if output_path else None,
        "warnings_count": len(warnings or []),
        "warnings": list(warnings or []),
        "metrics": metrics or {},
    }


def _envelope(name: str, body: dict[str, Any], run_summary: dict[str, Any]) -> dict[str, Any]:
    contract = build_contract(name)
    document = {
        "contract": contract,
        "schema_version": contract["version"],
        "tool_version": TOOL_VERSION,
        "run_summary": run_summary,
    }
    document.update(body)
    return document


def parse_metrics(result: ParseResult) -> dict[str, Any]:
    stats = result.validation_stats
    return {
        "total_rows": result.total_rows,
        "valid_rows": result.valid_rows,
        "successfully_parsed": stats.successfully_parsed,
        "skipped_rows": stats.skipped,
        "sold_properties": stats.sold_properties,
        "mapped_fields": result.mapping.mapped_count,
        "confidence": round(result.confidence, 4),
        "detected_format": result.detected_format,
    }


def build_parse_document(
    result: ParseResult,
    *,
    input_path: Path,
    output_path: Optional[Path] = None,
    include_records: bool = True,
) -> dict[str, Any]:
    run_summary = build_run_summary(
        command="parse",
        input_path=input_path,
        status="ok" if result.success else "failed",
        output_path=output_path,
        metrics=parse_metrics(result),
        warnings=result.warnings,
    )
    body = {"result": result.to_dict(include_records=include_records)}
    if result.sheet_name is not None:
        body["sheet_name"] = result.sheet_name
    if result.delimiter is not None:
        body["delimiter"] = result.delimiter
    return _envelope("listing_doctor.parse", body, run_summary)


def build_compliance_document(
    result: ParseResult,
    report: ComplianceReport,
    *,
    input_path: Path,
) -> dict[str, Any]:
    metrics = parse_metrics(result)
    metrics["compliance_score"] = report.compliance_score
    run_summary = build_run_summary(
        command="compliance",
        input_path=input_path,
        status="ok" if report.valid else "invalid",
        metrics=metrics,
        warnings=report.warnings,
    )
    body = {
        "parse": result.to_dict(include_records=False),
        "compliance": report.to_dict(),
    }
    return _envelope("listing_doctor.compliance", body, run_summary)


def build_sheets_document(sheet_names: list[str], *, input_path: Path) -> dict[str, Any]:
    run_summary = build_run_summary(
        command="sheets",
        input_path=input_path,
        metrics={"sheet_count": len(sheet_names)},
    )
    return _envelope("listing_doctor.sheets", {"sheets": list(sheet_names)}, run_summary)


def build_suggest_document(
    suggestions: dict[str, dict[str, Any]],
    *,
    input_path: Path,
    headers: list[str],
) -> dict[str, Any]:
    mapped = sum(1 for entry in suggestions.values() if entry["current"] is not None)
    run_summary = build_run_summary(
        command="suggest",
        input_path=input_path,
        metrics={"header_count": len(headers), "mapped_fields": mapped},
    )
    body = {"headers": list(headers), "columns": suggestions}
    return _envelope("listing_doctor.suggest", body, run_summary)
